"""Tests for /api/search."""

from tests.conftest import make_content, make_document, make_folder


class TestSearch:

    def test_missing_query_returns_400(self, client):
        resp = client.get("/api/search")
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["message"] == "Search query is required"

    def test_blank_query_returns_400(self, client):
        resp = client.get("/api/search", params={"query": "   "})
        assert resp.status_code == 400

    def test_matches_title_case_insensitive(self, client):
        client.post("/api/documents", json=make_document(title="Meeting Notes"))
        client.post("/api/documents", json=make_document(title="Groceries"))

        resp = client.get("/api/search", params={"query": "meeting"})
        assert resp.status_code == 200
        assert [d["title"] for d in resp.json()["documents"]] == ["Meeting Notes"]

    def test_matches_tags(self, client):
        client.post("/api/documents", json=make_document(title="A", tags=["Recipes"]))
        resp = client.get("/api/search", params={"query": "recipe"})
        assert [d["title"] for d in resp.json()["documents"]] == ["A"]

    def test_matches_content_text(self, client):
        content = make_content("Intro", "The quick brown fox")
        client.post("/api/documents", json=make_document(title="Story", content=content))

        resp = client.get("/api/search", params={"query": "BROWN"})
        assert [d["title"] for d in resp.json()["documents"]] == ["Story"]

    def test_serialization_keys_do_not_match(self, client):
        client.post("/api/documents", json=make_document(title="Plain"))
        resp = client.get("/api/search", params={"query": "entityMap"})
        assert resp.json()["documents"] == []

    def test_unparseable_content_matched_as_raw_text(self, client):
        client.post("/api/documents", json=make_document(title="Legacy", content="old plain note"))
        resp = client.get("/api/search", params={"query": "plain note"})
        assert [d["title"] for d in resp.json()["documents"]] == ["Legacy"]

    def test_matches_folders(self, client):
        client.post("/api/folders", json=make_folder("Travel"))
        client.post("/api/folders", json=make_folder("Misc", description="travel receipts"))
        client.post("/api/folders", json=make_folder("Work"))

        resp = client.get("/api/search", params={"query": "travel"})
        assert [f["name"] for f in resp.json()["folders"]] == ["Misc", "Travel"]

    def test_folder_scope(self, client):
        folder_id = client.post("/api/folders", json=make_folder("Box")).json()["id"]
        client.post("/api/documents", json=make_document(title="note in box", folderId=folder_id))
        client.post("/api/documents", json=make_document(title="note at top"))

        scoped = client.get("/api/search", params={"query": "note", "folderId": folder_id}).json()
        top = client.get("/api/search", params={"query": "note", "folderId": "root"}).json()
        assert [d["title"] for d in scoped["documents"]] == ["note in box"]
        assert [d["title"] for d in top["documents"]] == ["note at top"]

    def test_query_spaces_are_significant(self, client):
        client.post("/api/documents", json=make_document(title="foobar"))
        client.post("/api/documents", json=make_document(title="a foo"))

        resp = client.get("/api/search", params={"query": " foo"})
        assert [d["title"] for d in resp.json()["documents"]] == ["a foo"]

    def test_block_without_key_is_searched_as_text(self, client):
        content = '{"blocks":[{"text":"Hello"}]}'
        client.post("/api/documents", json=make_document(title="Keyless", content=content))

        assert client.get("/api/search", params={"query": "blocks"}).json()["documents"] == []
        hits = client.get("/api/search", params={"query": "hello"}).json()["documents"]
        assert [d["title"] for d in hits] == ["Keyless"]
