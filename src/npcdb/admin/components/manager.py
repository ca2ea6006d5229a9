"""Generic list/create/edit/delete manager for one entity type.

List state lives in ``st.session_state`` per parent and is only fetched
once; every mutation splices the server response into it (prepend on
create, replace on update, remove on delete).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import streamlit as st

from npcdb.admin.client import AdminApiError
from npcdb.admin.components.banner import clear_error, set_error
from npcdb.admin.state import prepend_item, remove_item, replace_item

Item = dict[str, Any]


@dataclass(frozen=True)
class ManagerSpec:
    """Wiring between one entity type and the generic manager."""

    key: str
    title: str
    load: Callable[[str], list[Item]]
    create: Callable[[str, Item], Item]
    update: Callable[[str, Item], Item]
    delete: Callable[[str], Any]
    # Renders the inputs inside the form and returns the raw widget values
    form: Callable[[Item, str], Item]
    # Turns widget values into an API payload; raises ValueError on bad input
    to_payload: Callable[[Item], Item]
    describe: Callable[[Item], tuple[str, str]]


def items_key(spec: ManagerSpec, parent_id: str) -> str:
    return f"{spec.key}_items_{parent_id}" if parent_id else f"{spec.key}_items"


def load_items(spec: ManagerSpec, parent_id: str) -> list[Item]:
    key = items_key(spec, parent_id)
    if key not in st.session_state:
        try:
            st.session_state[key] = spec.load(parent_id)
        except AdminApiError as e:
            set_error(e.message)
            st.session_state[key] = []
    items: list[Item] = st.session_state[key]
    return items


def _submit(spec: ManagerSpec, parent_id: str, editing: Item | None, values: Item) -> None:
    key = items_key(spec, parent_id)
    try:
        payload = spec.to_payload(values)
        if editing:
            saved = spec.update(editing["id"], payload)
            st.session_state[key] = replace_item(st.session_state[key], saved)
            st.session_state.pop(f"{spec.key}_editing", None)
            st.toast(f"{spec.title} updated")
        else:
            saved = spec.create(parent_id, payload)
            st.session_state[key] = prepend_item(st.session_state[key], saved)
            st.toast(f"{spec.title} created")
    except ValueError as e:
        set_error(str(e))
        return
    except AdminApiError as e:
        set_error(e.message)
        return
    clear_error()
    st.rerun()


def _delete(spec: ManagerSpec, parent_id: str, item_id: str) -> None:
    key = items_key(spec, parent_id)
    try:
        spec.delete(item_id)
    except AdminApiError as e:
        set_error(e.message)
        return
    st.session_state[key] = remove_item(st.session_state[key], item_id)
    st.session_state.pop(f"{spec.key}_pending_delete", None)
    editing = st.session_state.get(f"{spec.key}_editing")
    if editing and editing.get("id") == item_id:
        st.session_state.pop(f"{spec.key}_editing", None)
    clear_error()
    st.rerun()


def render_manager(spec: ManagerSpec, parent_id: str = "") -> list[Item]:
    """Render form plus list for one parent; returns the current items."""
    items = load_items(spec, parent_id)
    editing: Item | None = st.session_state.get(f"{spec.key}_editing")
    form_id = f"{spec.key}_form_{editing['id'] if editing else 'new'}"

    st.subheader(f"Edit {spec.title.lower()}" if editing else f"New {spec.title.lower()}")
    with st.form(form_id, clear_on_submit=editing is None):
        values = spec.form(editing or {}, form_id)
        submitted = st.form_submit_button("Save changes" if editing else "Create")
    if submitted:
        _submit(spec, parent_id, editing, values)
    if editing and st.button("Cancel editing", key=f"{spec.key}_cancel_edit"):
        st.session_state.pop(f"{spec.key}_editing", None)
        st.rerun()

    st.subheader(f"{spec.title} list ({len(items)})")
    if not items:
        st.caption("Nothing here yet.")
    pending = st.session_state.get(f"{spec.key}_pending_delete")
    for item in items:
        heading, caption = spec.describe(item)
        with st.container(border=True):
            st.markdown(f"**{heading}**")
            if caption:
                st.caption(caption)
            col_edit, col_delete, _ = st.columns([1, 1, 4])
            with col_edit:
                if st.button("Edit", key=f"{spec.key}_edit_{item['id']}"):
                    st.session_state[f"{spec.key}_editing"] = item
                    st.rerun()
            with col_delete:
                if st.button("Delete", key=f"{spec.key}_delete_{item['id']}"):
                    st.session_state[f"{spec.key}_pending_delete"] = item["id"]
                    st.rerun()
            if pending == item["id"]:
                st.warning(f"Delete “{heading}”? This cannot be undone.")
                col_yes, col_no, _ = st.columns([1, 1, 4])
                with col_yes:
                    if st.button("Confirm", key=f"{spec.key}_confirm_{item['id']}"):
                        _delete(spec, parent_id, item["id"])
                with col_no:
                    if st.button("Cancel", key=f"{spec.key}_keep_{item['id']}"):
                        st.session_state.pop(f"{spec.key}_pending_delete", None)
                        st.rerun()
    return items
