"""Tests for endpoints nested under movies and characters."""

import pytest

pytestmark = pytest.mark.integration


class TestCharacters:
    """Test character endpoints."""

    def test_create_under_movie(self, client, movie, character):
        """The movie id comes from the URL."""
        assert character["movieId"] == movie["id"]
        assert character["aliases"] == ["阿仁"]
        assert character["traits"] == {"身份": "卧底"}
        assert character["isPrimary"] is False

    def test_url_movie_id_wins(self, client, movie):
        """A movieId in the body cannot redirect the record."""
        response = client.post(
            f"/api/movies/{movie['id']}/characters",
            json={"name": "韩琛", "movieId": "someone-else"},
        )
        assert response.json()["data"]["movieId"] == movie["id"]

    def test_create_under_missing_movie(self, client):
        """Creating under an unknown movie is a 404."""
        response = client.post(
            "/api/movies/missing/characters", json={"name": "韩琛"}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Movie not found"

    def test_malformed_traits(self, client, movie):
        """Traits text that is not a JSON object is a 400 with the hint."""
        response = client.post(
            f"/api/movies/{movie['id']}/characters",
            json={"name": "x", "traits": "{oops"},
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Traits must be valid JSON")

    def test_partial_update(self, client, character):
        """Updating only the description keeps aliases, traits and actor."""
        response = client.put(
            f"/api/characters/{character['id']}",
            json={"description": "警校学员，被派往黑帮卧底十年。"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["description"] == "警校学员，被派往黑帮卧底十年。"
        assert data["aliases"] == character["aliases"]
        assert data["traits"] == character["traits"]
        assert data["actorName"] == "梁朝伟"

    def test_list(self, client, movie, character):
        """Listing returns the movie's characters."""
        response = client.get(f"/api/movies/{movie['id']}/characters")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()["data"]] == [character["id"]]

    def test_delete(self, client, character):
        """Deleted characters are gone."""
        assert client.delete(f"/api/characters/{character['id']}").status_code == 200
        assert client.get(f"/api/characters/{character['id']}").status_code == 404


class TestCharacterNotes:
    """Test note endpoints nested under characters."""

    def test_create_and_list(self, client, character):
        """Notes hang off a character."""
        response = client.post(
            f"/api/characters/{character['id']}/notes",
            json={"noteType": "persona", "content": "外冷内热"},
        )

        assert response.status_code == 201
        note = response.json()["data"]
        assert note["characterId"] == character["id"]
        assert note["noteType"] == "persona"

        listed = client.get(f"/api/characters/{character['id']}/notes").json()["data"]
        assert [item["id"] for item in listed] == [note["id"]]

    def test_missing_character(self, client):
        """Creating a note for an unknown character is a 404."""
        response = client.post(
            "/api/characters/missing/notes",
            json={"noteType": "persona", "content": "x"},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Character not found"

    def test_unknown_note_type(self, client, character):
        """Unknown note types are a 400."""
        response = client.post(
            f"/api/characters/{character['id']}/notes",
            json={"noteType": "gossip", "content": "x"},
        )
        assert response.status_code == 400

    def test_notes_removed_with_character(self, client, character):
        """Deleting a character deletes its notes."""
        note = client.post(
            f"/api/characters/{character['id']}/notes",
            json={"noteType": "backstory", "content": "x"},
        ).json()["data"]

        client.delete(f"/api/characters/{character['id']}")

        assert client.get(f"/api/notes/{note['id']}").status_code == 404


class TestScenes:
    """Test scene endpoints."""

    def test_listed_by_scene_number(self, client, movie):
        """Scenes are ordered by their number, not by creation."""
        for number in (3, 1, 2):
            client.post(
                f"/api/movies/{movie['id']}/scenes", json={"sceneNumber": number}
            )

        data = client.get(f"/api/movies/{movie['id']}/scenes").json()["data"]

        assert [item["sceneNumber"] for item in data] == [1, 2, 3]

    def test_snake_case_update(self, client, movie):
        """Updates accept snake_case timing fields."""
        scene = client.post(
            f"/api/movies/{movie['id']}/scenes",
            json={"sceneNumber": 1, "summary": "天台"},
        ).json()["data"]

        response = client.put(
            f"/api/scenes/{scene['id']}", json={"start_ms": 1000, "end_ms": 5000}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["startMs"] == 1000
        assert data["endMs"] == 5000
        assert data["summary"] == "天台"

    def test_scene_number_required(self, client, movie):
        """Scenes need a number."""
        response = client.post(
            f"/api/movies/{movie['id']}/scenes", json={"summary": "x"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Scene number is required"


class TestSubtitleSegments:
    """Test subtitle endpoints."""

    def _create(self, client, movie_id, start_ms, end_ms, text="..."):
        return client.post(
            f"/api/movies/{movie_id}/subtitle-segments",
            json={"startMs": start_ms, "endMs": end_ms, "text": text},
        )

    def test_playback_order_and_pagination(self, client, movie):
        """Segments come back ordered by start time, paginated."""
        for start in (3000, 1000, 2000):
            self._create(client, movie["id"], start, start + 500)

        data = client.get(
            f"/api/movies/{movie['id']}/subtitle-segments",
            params={"limit": 2},
        ).json()["data"]

        assert [item["startMs"] for item in data["items"]] == [1000, 2000]
        assert data["pagination"] == {"limit": 2, "offset": 0, "count": 2}

    def test_default_page_size(self, client, movie):
        """The subtitle page size defaults to 100."""
        data = client.get(f"/api/movies/{movie['id']}/subtitle-segments").json()[
            "data"
        ]
        assert data["pagination"]["limit"] == 100

    def test_end_before_start(self, client, movie):
        """Timing order is not enforced."""
        response = self._create(client, movie["id"], 5000, 1000)

        assert response.status_code == 201
        assert response.json()["data"]["endMs"] == 1000

    def test_speaker_link_cleared_with_character(self, client, movie, character):
        """Deleting a character keeps its subtitles but clears the link."""
        segment = client.post(
            f"/api/movies/{movie['id']}/subtitle-segments",
            json={
                "startMs": 0,
                "endMs": 1000,
                "text": "对不起，我是警察。",
                "characterId": character["id"],
            },
        ).json()["data"]

        client.delete(f"/api/characters/{character['id']}")

        stored = client.get(f"/api/subtitle-segments/{segment['id']}").json()["data"]
        assert stored["characterId"] is None

    def test_unknown_character_link(self, client, movie):
        """Linking a segment to a missing character violates a constraint."""
        response = client.post(
            f"/api/movies/{movie['id']}/subtitle-segments",
            json={"startMs": 0, "endMs": 1, "text": "x", "characterId": "missing"},
        )
        assert response.status_code == 400


class TestReferencesScriptsDialogues:
    """Test the remaining movie-owned collections."""

    def test_reference(self, client, movie):
        """References are validated and stored."""
        response = client.post(
            f"/api/movies/{movie['id']}/references",
            json={"type": "trivia", "content": "片名取自佛经“无间地狱”。"},
        )

        assert response.status_code == 201
        reference = response.json()["data"]
        assert reference["type"] == "trivia"

        listed = client.get(f"/api/movies/{movie['id']}/references").json()["data"]
        assert len(listed) == 1

    def test_reference_bad_type(self, client, movie):
        """Unknown reference types are a 400."""
        response = client.post(
            f"/api/movies/{movie['id']}/references",
            json={"type": "rumour", "content": "x"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Unknown reference type: rumour"

    def test_script_crud(self, client, movie):
        """Scripts are created, updated and deleted."""
        script = client.post(
            f"/api/movies/{movie['id']}/scripts",
            json={"scriptTitle": "天台", "screenplayText": "INT. 天台 - DAY"},
        ).json()["data"]

        updated = client.put(
            f"/api/movie-scripts/{script['id']}", json={"plotText": "对峙"}
        ).json()["data"]
        assert updated["plotText"] == "对峙"
        assert updated["screenplayText"] == "INT. 天台 - DAY"

        assert client.delete(f"/api/movie-scripts/{script['id']}").status_code == 200
        assert client.get(f"/api/movie-scripts/{script['id']}").status_code == 404

    def test_dialogue_file(self, client, movie):
        """Dialogue files keep the client-computed line count."""
        response = client.post(
            f"/api/movies/{movie['id']}/dialogues",
            json={"fileName": "rooftop.txt", "dialogueText": "a\nb", "totalLines": 2},
        )

        assert response.status_code == 201
        dialogue = response.json()["data"]
        assert dialogue["totalLines"] == 2
        assert client.get(f"/api/movie-dialogues/{dialogue['id']}").status_code == 200
