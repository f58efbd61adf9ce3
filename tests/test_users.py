# =============================================================================
# tests/test_users.py - User Profile Endpoint Tests
# =============================================================================

from bson import ObjectId


class TestGetUser:
    def test_profile_without_password(self, client, user):
        user_id, headers = user

        response = client.get(f"/users/{user_id}", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["_id"] == user_id
        assert body["name"] == "Adam Grant"
        assert "password" not in body
        assert body["posts"] == []
        assert body["comments"] == []

    def test_posts_joined_with_title_and_body(self, client, user, create_post):
        user_id, headers = user
        first = create_post(title="First", body="0123456789 first")
        second = create_post(title="Second", body="0123456789 second")

        body = client.get(f"/users/{user_id}", headers=headers).json()

        assert body["posts"] == [
            {"_id": first["_id"], "title": "First", "post": "0123456789 first"},
            {"_id": second["_id"], "title": "Second", "post": "0123456789 second"},
        ]

    def test_unknown_user(self, client, user):
        response = client.get(f"/users/{ObjectId()}", headers=user[1])

        assert response.status_code == 404
        assert response.json() == {"message": "Invalid user ID!"}

    def test_requires_token(self, client, user):
        user_id, _ = user
        assert client.get(f"/users/{user_id}").status_code == 401
