# =============================================================================
# tests/test_comments.py - Comment Endpoint Tests
# =============================================================================

import pytest
from bson import ObjectId

from lib.document_store import COMMENTS, POSTS, USERS


@pytest.fixture
def post(create_post):
    return create_post()


@pytest.fixture
def create_comment(client, user, post):
    """Factory that comments on `post` and returns the comment JSON."""
    user_id, headers = user

    def _create(text: str = "Well said", author=None, post_id=None):
        author_id, author_headers = author or (user_id, headers)
        response = client.post(
            "/comments/post",
            json={"postId": post_id or post["_id"], "userId": author_id, "comment": text},
            headers=author_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["comment"]

    return _create


class TestCreateComment:
    def test_links_comment_to_user_and_post(self, client, store, user, post):
        user_id, headers = user

        response = client.post(
            "/comments/post",
            json={"postId": post["_id"], "userId": user_id, "comment": "Well said"},
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "New comment created"
        comment = body["comment"]
        assert comment["comment"] == "Well said"
        assert comment["creator"] == user_id
        assert comment["post"] == post["_id"]

        assert [str(c) for c in store.find_by_id(USERS, user_id)["comments"]] == [comment["_id"]]
        assert [str(c) for c in store.find_by_id(POSTS, post["_id"])["comments"]] == [comment["_id"]]

    def test_unknown_user(self, client, store, user, post):
        _, headers = user

        response = client.post(
            "/comments/post",
            json={"postId": post["_id"], "userId": str(ObjectId()), "comment": "Hi"},
            headers=headers,
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Invalid user ID!"
        assert store.count(COMMENTS) == 0

    def test_unknown_post(self, client, store, user):
        user_id, headers = user

        response = client.post(
            "/comments/post",
            json={"postId": str(ObjectId()), "userId": user_id, "comment": "Hi"},
            headers=headers,
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Invalid post ID!"
        assert store.count(COMMENTS) == 0

    def test_empty_comment(self, client, user, post):
        user_id, headers = user

        response = client.post(
            "/comments/post",
            json={"postId": post["_id"], "userId": user_id, "comment": ""},
            headers=headers,
        )

        assert response.status_code == 400


class TestListComments:
    def test_new_comment_listed_exactly_once(self, client, user, post, create_comment):
        _, headers = user
        comment = create_comment()

        body = client.get(f"/comments/{post['_id']}", headers=headers).json()

        assert [c["_id"] for c in body["comments"]].count(comment["_id"]) == 1
        assert body["totalComments"] == 1
        assert body["sentComments"] == 1
        assert body["currentPage"] == 1

    def test_creator_joined_in_insertion_order(self, client, signup, user, post, create_comment):
        other = signup(name="Other")
        create_comment("first")
        create_comment("second", author=other)

        body = client.get(f"/comments/{post['_id']}", headers=user[1]).json()

        assert [c["comment"] for c in body["comments"]] == ["first", "second"]
        assert [c["creator"]["name"] for c in body["comments"]] == ["Adam Grant", "Other"]

    def test_only_this_posts_comments(self, client, user, post, create_post, create_comment):
        other_post = create_post(title="Other")
        create_comment("here")
        create_comment("there", post_id=other_post["_id"])

        body = client.get(f"/comments/{post['_id']}", headers=user[1]).json()

        assert [c["comment"] for c in body["comments"]] == ["here"]

    def test_pagination(self, client, user, post, create_comment):
        for i in range(1, 8):
            create_comment(f"c{i}")

        body = client.get(f"/comments/{post['_id']}?page=2&limit=3", headers=user[1]).json()

        assert [c["comment"] for c in body["comments"]] == ["c4", "c5", "c6"]
        assert body["totalComments"] == 7
        assert body["currentPage"] == 2

    def test_unknown_post(self, client, user):
        response = client.get(f"/comments/{ObjectId()}", headers=user[1])

        assert response.status_code == 404
        assert response.json()["message"] == "Post not found"


class TestUpdateComment:
    def test_edit_text(self, client, user, create_comment):
        comment = create_comment()

        response = client.put(
            f"/comments/{comment['_id']}",
            json={"comment": "Edited"},
            headers=user[1],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Comment edited successfully!"
        assert body["comment"]["comment"] == "Edited"

    def test_any_authenticated_user_may_edit(self, client, signup, create_comment):
        comment = create_comment()
        _, stranger_headers = signup(name="Stranger")

        response = client.put(
            f"/comments/{comment['_id']}",
            json={"comment": "Not mine"},
            headers=stranger_headers,
        )

        assert response.status_code == 200

    def test_missing_comment(self, client, user):
        response = client.put(f"/comments/{ObjectId()}", json={"comment": "x"}, headers=user[1])

        assert response.status_code == 404
        assert response.json()["message"] == "Comment not found"

    def test_validation(self, client, user, create_comment):
        comment = create_comment()

        response = client.put(f"/comments/{comment['_id']}", json={}, headers=user[1])

        assert response.status_code == 400


class TestDeleteComment:
    def test_unlinks_from_user_and_post(self, client, store, user, post, create_comment):
        user_id, headers = user
        doomed = create_comment("doomed")
        kept = create_comment("kept")

        response = client.delete(f"/comments/{doomed['_id']}", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Comment deleted successfully!"
        assert body["comment"]["_id"] == doomed["_id"]

        assert store.find_by_id(COMMENTS, doomed["_id"]) is None
        assert [str(c) for c in store.find_by_id(USERS, user_id)["comments"]] == [kept["_id"]]
        assert [str(c) for c in store.find_by_id(POSTS, post["_id"])["comments"]] == [kept["_id"]]

        listed = client.get(f"/comments/{post['_id']}", headers=headers).json()
        assert [c["_id"] for c in listed["comments"]] == [kept["_id"]]

    def test_missing_comment(self, client, user):
        response = client.delete(f"/comments/{ObjectId()}", headers=user[1])

        assert response.status_code == 404
        assert response.json()["message"] == "Comment to delete not found!"
