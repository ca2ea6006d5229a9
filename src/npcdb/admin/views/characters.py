from __future__ import annotations

from typing import Any

import streamlit as st

from npcdb.admin.client import AdminApiClient
from npcdb.admin.components.manager import ManagerSpec, render_manager
from npcdb.admin.components.selectors import select_movie
from npcdb.admin.state import (
    format_comma_list,
    format_traits,
    optional_text,
    parse_comma_list,
    parse_traits,
)


def _form(item: dict[str, Any], form_id: str) -> dict[str, Any]:
    c1, c2 = st.columns(2)
    with c1:
        name = st.text_input("Name *", value=item.get("name", ""), key=f"{form_id}_name")
        actor = st.text_input(
            "Actor", value=item.get("actorName") or "", key=f"{form_id}_actor"
        )
    with c2:
        aliases = st.text_input(
            "Aliases (comma separated)",
            value=format_comma_list(item.get("aliases")),
            key=f"{form_id}_aliases",
        )
        is_primary = st.checkbox(
            "Primary character",
            value=bool(item.get("isPrimary")),
            key=f"{form_id}_primary",
        )
    description = st.text_area(
        "Description", value=item.get("description") or "", key=f"{form_id}_desc"
    )
    traits = st.text_area(
        "Traits (JSON)",
        value=format_traits(item.get("traits")),
        placeholder='{"temperament": "steadfast"}',
        key=f"{form_id}_traits",
    )
    return {
        "name": name,
        "actorName": actor,
        "aliases": aliases,
        "isPrimary": is_primary,
        "description": description,
        "traits": traits,
    }


def _to_payload(values: dict[str, Any]) -> dict[str, Any]:
    if not values["name"].strip():
        raise ValueError("Character name is required")
    return {
        "name": values["name"].strip(),
        "actorName": optional_text(values["actorName"]),
        "aliases": parse_comma_list(values["aliases"]),
        "isPrimary": bool(values["isPrimary"]),
        "description": optional_text(values["description"]),
        "traits": parse_traits(values["traits"]),
    }


def _describe(item: dict[str, Any]) -> tuple[str, str]:
    heading = item.get("name", "")
    if item.get("isPrimary"):
        heading += " ⭐"
    parts = [
        f"Played by {item['actorName']}" if item.get("actorName") else "",
        "Aliases: " + ", ".join(item["aliases"]) if item.get("aliases") else "",
        item.get("description") or "",
    ]
    return heading, " · ".join(p for p in parts if p)


def render(client: AdminApiClient) -> None:
    st.title("Characters")
    movie_id = select_movie(client, key="characters")
    if not movie_id:
        return
    spec = ManagerSpec(
        key="characters",
        title="Character",
        load=client.list_characters,
        create=client.create_character,
        update=client.update_character,
        delete=client.delete_character,
        form=_form,
        to_payload=_to_payload,
        describe=_describe,
    )
    render_manager(spec, movie_id)
