import pytest
from bson import ObjectId

from songbook.core.errors import InvalidMoveError, NotFoundError
from songbook.services.ordering import DOWN, UP, TutorialSequence


def tutorial_titles(client, song_id):
    return [t["title"] for t in client.get(f"/api/song/{song_id}").json()["tutorials"]]


@pytest.fixture
def song_abc(make_song, make_tutorial):
    song = make_song("Ave Maria")
    tutorials = {title: make_tutorial(song["_id"], title) for title in ("A", "B", "C")}
    return song, tutorials


def test_add_appends_in_order(client, song_abc):
    song, tutorials = song_abc

    assert tutorial_titles(client, song["_id"]) == ["A", "B", "C"]
    assert all(ObjectId.is_valid(t["_id"]) for t in tutorials.values())


def test_add_returns_song_and_tutorial(client, make_song):
    song = make_song("Ave Maria")
    payload = {
        "type": "audio",
        "title": "Alto line",
        "googleId": "1AbC",
        "lyrics": "Ave Maria, gratia plena",
        "categories": ["alto", "warmup"],
        "gender": "F",
    }

    response = client.post(f"/api/song/{song['_id']}", json=payload)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Tutorial added"
    assert body["tutorial"]["gender"] == "F"
    assert body["tutorial"]["categories"] == ["alto", "warmup"]
    assert body["song"]["tutorials"][0]["_id"] == body["tutorial"]["_id"]


def test_add_requires_fields(client, make_song):
    song = make_song("Ave Maria")

    response = client.post(f"/api/song/{song['_id']}", json={"type": "video"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_add_rejects_unknown_gender(client, make_song):
    song = make_song("Ave Maria")
    payload = {"type": "video", "title": "Bass", "googleId": "x", "gender": "X"}

    response = client.post(f"/api/song/{song['_id']}", json=payload)
    assert response.status_code == 400


def test_add_to_unknown_song_is_404(client):
    payload = {"type": "video", "title": "Bass", "googleId": "x"}

    response = client.post(f"/api/song/{ObjectId()}", json=payload)
    assert response.status_code == 404


def test_move_up_middle_tutorial(client, song_abc):
    song, tutorials = song_abc

    response = client.put(f"/api/song/{song['_id']}/move-up/{tutorials['B']['_id']}")
    assert response.status_code == 200
    assert [t["title"] for t in response.json()["song"]["tutorials"]] == ["B", "A", "C"]
    assert tutorial_titles(client, song["_id"]) == ["B", "A", "C"]


def test_move_down_first_tutorial(client, song_abc):
    song, tutorials = song_abc

    response = client.put(f"/api/song/{song['_id']}/move-down/{tutorials['A']['_id']}")
    assert response.status_code == 200
    assert tutorial_titles(client, song["_id"]) == ["B", "A", "C"]


def test_first_tutorial_cannot_move_up(client, song_abc):
    song, tutorials = song_abc

    response = client.put(f"/api/song/{song['_id']}/move-up/{tutorials['A']['_id']}")
    assert response.status_code == 400
    assert response.json() == {"error": "Tutorial cannot move further up"}
    assert tutorial_titles(client, song["_id"]) == ["A", "B", "C"]


def test_last_tutorial_cannot_move_down(client, song_abc):
    song, tutorials = song_abc

    response = client.put(f"/api/song/{song['_id']}/move-down/{tutorials['C']['_id']}")
    assert response.status_code == 400
    assert tutorial_titles(client, song["_id"]) == ["A", "B", "C"]


def test_move_unknown_tutorial_is_404(client, song_abc):
    song, _ = song_abc

    response = client.put(f"/api/song/{song['_id']}/move-up/{ObjectId()}")
    assert response.status_code == 404
    assert response.json() == {"error": "Tutorial not found"}


def test_tutorial_move_is_a_single_write(client, mongo, song_abc):
    song, tutorials = song_abc
    original_update = mongo.songs.update_one
    writes = []

    async def counting_update(query, update, session=None):
        writes.append(update)
        return await original_update(query, update, session=session)

    mongo.songs.update_one = counting_update
    try:
        client.put(f"/api/song/{song['_id']}/move-down/{tutorials['B']['_id']}")
    finally:
        del mongo.songs.update_one

    assert len(writes) == 1
    assert [t["title"] for t in writes[0]["$set"]["tutorials"]] == ["A", "C", "B"]


def test_edit_keeps_id_and_position(client, song_abc):
    song, tutorials = song_abc
    payload = {"type": "audio", "title": "B2", "googleId": "new-gid", "gender": "M"}

    response = client.put(f"/api/song/{song['_id']}/{tutorials['B']['_id']}", json=payload)
    assert response.status_code == 200
    edited = response.json()["tutorial"]
    assert edited["_id"] == tutorials["B"]["_id"]
    assert edited["googleId"] == "new-gid"
    assert tutorial_titles(client, song["_id"]) == ["A", "B2", "C"]


def test_edit_unknown_tutorial_is_404_without_mutation(client, mongo, song_abc):
    song, _ = song_abc
    stored_before = mongo.songs.docs[0]
    payload = {"type": "audio", "title": "Ghost", "googleId": "ghost"}

    response = client.put(f"/api/song/{song['_id']}/{ObjectId()}", json=payload)
    assert response.status_code == 404
    assert response.json() == {"error": "Tutorial not found"}
    assert mongo.songs.docs[0] == stored_before


def test_edit_with_malformed_tutorial_id_is_400(client, song_abc):
    song, _ = song_abc
    payload = {"type": "audio", "title": "Ghost", "googleId": "ghost"}

    response = client.put(f"/api/song/{song['_id']}/nope", json=payload)
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid tutorial ID format"}


def test_delete_tutorial(client, song_abc):
    song, tutorials = song_abc

    response = client.delete(f"/api/song/{song['_id']}/{tutorials['B']['_id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Tutorial deleted"
    assert tutorial_titles(client, song["_id"]) == ["A", "C"]

    response = client.delete(f"/api/song/{song['_id']}/{tutorials['B']['_id']}")
    assert response.status_code == 404


class TestTutorialSequence:
    def setup_method(self):
        self.ids = [ObjectId() for _ in range(3)]
        self.sequence = TutorialSequence(
            [{"_id": tutorial_id, "title": title} for tutorial_id, title in zip(self.ids, "ABC")]
        )

    def titles(self):
        return [t["title"] for t in self.sequence]

    def test_move_returns_new_position(self):
        assert self.sequence.move(self.ids[2], UP) == 1
        assert self.titles() == ["A", "C", "B"]

    def test_move_at_boundaries(self):
        with pytest.raises(InvalidMoveError):
            self.sequence.move(self.ids[0], UP)
        with pytest.raises(InvalidMoveError):
            self.sequence.move(self.ids[2], DOWN)
        assert self.titles() == ["A", "B", "C"]

    def test_single_tutorial_cannot_move(self):
        sequence = TutorialSequence([{"_id": self.ids[0], "title": "Solo"}])
        with pytest.raises(InvalidMoveError):
            sequence.move(self.ids[0], DOWN)

    def test_position_of_unknown(self):
        with pytest.raises(NotFoundError):
            self.sequence.position_of(ObjectId())

    def test_replace_and_remove(self):
        self.sequence.replace(self.ids[1], {"title": "B2", "_id": ObjectId()})
        assert self.sequence[1]["_id"] == self.ids[1]

        removed = self.sequence.remove(self.ids[0])
        assert removed["title"] == "A"
        assert len(self.sequence) == 2
        assert self.titles() == ["B2", "C"]

    def test_to_documents_is_a_copy(self):
        documents = self.sequence.to_documents()
        documents.reverse()
        assert self.titles() == ["A", "B", "C"]
