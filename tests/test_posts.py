# =============================================================================
# tests/test_posts.py - Post Endpoint Tests
# =============================================================================

from unittest.mock import patch

from bson import ObjectId

from lib.document_store import COMMENTS, POSTS, USERS


class TestCreatePost:
    def test_create_links_post_to_user(self, client, store, user):
        user_id, headers = user

        response = client.post(
            "/posts/post",
            json={"title": "T", "post": "0123456789", "userId": user_id},
            headers=headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Post created successfully!"
        post = body["post"]
        assert post["title"] == "T"
        assert post["creator"] == user_id
        assert post["comments"] == []
        assert post["createdAt"] and post["updatedAt"]

        owner = store.find_by_id(USERS, user_id)
        assert [str(p) for p in owner["posts"]] == [post["_id"]]

    def test_unknown_user(self, client, store, user):
        _, headers = user

        response = client.post(
            "/posts/post",
            json={"title": "T", "post": "0123456789", "userId": str(ObjectId())},
            headers=headers,
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Invalid user ID!"
        assert store.count(POSTS) == 0

    def test_body_too_short(self, client, user):
        user_id, headers = user

        response = client.post(
            "/posts/post",
            json={"title": "T", "post": "short", "userId": user_id},
            headers=headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Validation error!"

    def test_malformed_stored_post_is_500(self, client, store, user):
        user_id, headers = user
        record = {"_id": ObjectId(), "title": "T"}

        with patch.object(store, "insert", return_value=record):
            response = client.post(
                "/posts/post",
                json={"title": "T", "post": "0123456789", "userId": user_id},
                headers=headers,
            )

        assert response.status_code == 500


class TestGetPost:
    def test_creator_name_joined(self, client, user, create_post):
        user_id, headers = user
        post = create_post()

        response = client.get(f"/posts/{post['_id']}", headers=headers)

        assert response.status_code == 200
        assert response.json()["creator"] == {"_id": user_id, "name": "Adam Grant"}

    def test_not_found(self, client, user):
        _, headers = user

        response = client.get(f"/posts/{ObjectId()}", headers=headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Post not found!"}

    def test_malformed_id_is_not_found(self, client, user):
        _, headers = user
        assert client.get("/posts/not-an-id", headers=headers).status_code == 404


class TestListPosts:
    def test_page_two_of_twelve(self, client, user, create_post):
        _, headers = user
        for i in range(1, 13):
            create_post(title=f"Post {i}")

        response = client.get("/posts?page=2&limit=5", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["totalPosts"] == 12
        assert body["sentPosts"] == 5
        assert body["currentPage"] == 2
        # Items 6-10 by creation order, newest first within the page
        assert [p["title"] for p in body["posts"]] == [f"Post {i}" for i in range(10, 5, -1)]

    def test_defaults_for_missing_or_bad_params(self, client, user, create_post):
        _, headers = user
        for i in range(1, 13):
            create_post(title=f"Post {i}")

        for query in ("", "?page=abc&limit=xyz", "?page=0&limit=-3"):
            body = client.get(f"/posts{query}", headers=headers).json()
            assert body["currentPage"] == 1
            assert body["sentPosts"] == 10

    def test_out_of_range_params_use_defaults(self, client, user, create_post):
        _, headers = user
        create_post()
        huge = str(10**20)

        response = client.get(f"/posts?page={huge}&limit={huge}", headers=headers)

        assert response.status_code == 200
        assert response.json()["currentPage"] == 1
        assert response.json()["sentPosts"] == 1

    def test_creators_joined(self, client, signup, create_post):
        other = signup(name="Brené Brown")
        create_post(title="Mine")
        create_post(title="Theirs", owner=other)

        body = client.get("/posts", headers=other[1]).json()

        names = {p["title"]: p["creator"]["name"] for p in body["posts"]}
        assert names == {"Mine": "Adam Grant", "Theirs": "Brené Brown"}

    def test_empty(self, client, user):
        _, headers = user
        body = client.get("/posts", headers=headers).json()
        assert body == {"posts": [], "sentPosts": 0, "currentPage": 1, "totalPosts": 0}


class TestUpdatePost:
    def test_owner_can_edit(self, client, user, create_post):
        user_id, headers = user
        post = create_post()

        response = client.put(
            f"/posts/{post['_id']}",
            json={"title": "New title", "post": "Brand new body", "userId": user_id},
            headers=headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Post edited successfully"
        assert body["post"]["title"] == "New title"
        assert body["post"]["post"] == "Brand new body"

    def test_foreign_user_id_is_forbidden(self, client, store, signup, user, create_post):
        post = create_post(title="Original")
        intruder_id, intruder_headers = signup(name="Intruder")

        response = client.put(
            f"/posts/{post['_id']}",
            json={"title": "Hacked", "post": "0123456789 hacked", "userId": intruder_id},
            headers=intruder_headers,
        )

        assert response.status_code == 403
        assert response.json() == {"message": "Creator ID didn't match!"}
        assert store.find_by_id(POSTS, post["_id"])["title"] == "Original"

    def test_ownership_uses_body_user_id(self, client, signup, user, create_post):
        # The check compares the body's userId, not the token identity
        owner_id, _ = user
        post = create_post()
        _, other_headers = signup(name="Other")

        response = client.put(
            f"/posts/{post['_id']}",
            json={"title": "Edited", "post": "0123456789", "userId": owner_id},
            headers=other_headers,
        )

        assert response.status_code == 200

    def test_missing_post(self, client, user):
        user_id, headers = user

        response = client.put(
            f"/posts/{ObjectId()}",
            json={"title": "T", "post": "0123456789", "userId": user_id},
            headers=headers,
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Post to be edited not found"

    def test_validation(self, client, user, create_post):
        user_id, headers = user
        post = create_post()

        response = client.put(
            f"/posts/{post['_id']}",
            json={"title": "", "post": "0123456789", "userId": user_id},
            headers=headers,
        )

        assert response.status_code == 400


class TestDeletePost:
    def test_cascade(self, client, store, signup, user, create_post):
        owner_id, headers = user
        commenter_id, commenter_headers = signup(name="Commenter")
        post = create_post()
        keep = create_post(title="Keep")

        comment_ids = []
        for author_id, author_headers in ((owner_id, headers), (commenter_id, commenter_headers)):
            response = client.post(
                "/comments/post",
                json={"postId": post["_id"], "userId": author_id, "comment": "Nice"},
                headers=author_headers,
            )
            comment_ids.append(response.json()["comment"]["_id"])
        kept_comment = client.post(
            "/comments/post",
            json={"postId": keep["_id"], "userId": commenter_id, "comment": "Stays"},
            headers=commenter_headers,
        ).json()["comment"]["_id"]

        response = client.delete(f"/posts/{post['_id']}", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Post deleted successfully"
        assert body["post"]["_id"] == post["_id"]

        assert store.find_by_id(POSTS, post["_id"]) is None
        assert store.count(COMMENTS, {"post": ObjectId(post["_id"])}) == 0
        for comment_id in comment_ids:
            assert store.find_by_id(COMMENTS, comment_id) is None

        owner = store.find_by_id(USERS, owner_id)
        commenter = store.find_by_id(USERS, commenter_id)
        assert [str(p) for p in owner["posts"]] == [keep["_id"]]
        assert owner["comments"] == []
        assert [str(c) for c in commenter["comments"]] == [kept_comment]
        assert store.find_by_id(COMMENTS, kept_comment) is not None

    def test_missing_post(self, client, user):
        _, headers = user

        response = client.delete(f"/posts/{ObjectId()}", headers=headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Post to delete not found!"


class TestScenario:
    def test_signup_login_create_delete(self, client, settings):
        signup = client.post(
            "/auth/signup",
            json={"name": "A", "email": "a@example.com", "password": "password1"},
        )
        assert signup.status_code == 201
        user_id = signup.json()["userId"]

        login = client.post("/auth/login", json={"email": "a@example.com", "password": "password1"})
        assert login.status_code == 200
        assert login.json()["userId"] == user_id
        headers = {"Authorization": f"Bearer {login.json()['token']}"}

        created = client.post(
            "/posts/post",
            json={"title": "T", "post": "0123456789", "userId": user_id},
            headers=headers,
        )
        assert created.status_code == 201
        post_id = created.json()["post"]["_id"]

        assert client.delete(f"/posts/{post_id}", headers=headers).status_code == 200
        assert client.get(f"/posts/{post_id}", headers=headers).status_code == 404
