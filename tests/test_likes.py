"""
Tests for like toggles on videos, comments and tweets.
"""

from conftest import API


class TestVideoLikes:

    def test_toggle_alternates(self, client, register_user, upload_video):
        _, owner = register_user("alice")
        _, fan = register_user("bob")
        video = upload_video(owner)

        first = client.post(f"{API}/likes/toggle/v/{video['id']}", headers=fan).json()
        second = client.post(f"{API}/likes/toggle/v/{video['id']}", headers=fan).json()
        third = client.post(f"{API}/likes/toggle/v/{video['id']}", headers=fan).json()

        assert first["message"] == "Video liked"
        assert first["data"]["liked"] is True
        assert first["data"]["like"]["video_id"] == video["id"]
        assert second["message"] == "Video unliked"
        assert second["data"]["like"] is None
        assert [r["data"]["likes_count"] for r in (first, second, third)] == [1, 0, 1]

    def test_liked_flag_in_card(self, client, register_user, upload_video):
        _, owner = register_user("alice")
        _, fan = register_user("bob")
        video = upload_video(owner)
        client.post(f"{API}/likes/toggle/v/{video['id']}", headers=fan)

        as_fan = client.get(f"{API}/videos/{video['id']}", headers=fan).json()["data"]
        as_owner = client.get(f"{API}/videos/{video['id']}", headers=owner).json()["data"]

        assert as_fan["is_liked"] is True
        assert as_owner["is_liked"] is False
        assert as_owner["likes_count"] == 1

    def test_unpublished_video_scenario(self, client, register_user, upload_video):
        _, owner = register_user("alice")
        _, fan = register_user("bob")
        video = upload_video(owner)
        client.patch(f"{API}/videos/toggle/publish/{video['id']}", headers=owner)

        refused = client.post(f"{API}/likes/toggle/v/{video['id']}", headers=fan)
        own = client.post(f"{API}/likes/toggle/v/{video['id']}", headers=owner)

        assert refused.status_code == 404
        assert own.status_code == 200
        assert own.json()["data"]["likes_count"] == 1

    def test_missing_video(self, client, register_user):
        _, headers = register_user("alice")

        assert client.post(f"{API}/likes/toggle/v/404", headers=headers).status_code == 404

    def test_requires_authentication(self, client, register_user, upload_video):
        _, owner = register_user("alice")
        video = upload_video(owner)

        assert client.post(f"{API}/likes/toggle/v/{video['id']}").status_code == 401

    def test_liked_videos_list(self, client, register_user, upload_video):
        _, owner = register_user("alice")
        _, fan = register_user("bob")
        liked = upload_video(owner, title="liked")
        upload_video(owner, title="skipped")
        client.post(f"{API}/likes/toggle/v/{liked['id']}", headers=fan)

        page = client.get(f"{API}/likes/videos", headers=fan).json()["data"]

        assert [v["title"] for v in page["items"]] == ["liked"]
        assert page["items"][0]["is_liked"] is True


class TestCommentLikes:

    def test_toggle_comment_like(self, client, register_user, upload_video):
        _, owner = register_user("alice")
        _, fan = register_user("bob")
        video = upload_video(owner)
        comment = client.post(f"{API}/comments/{video['id']}", json={"content": "great"}, headers=owner).json()["data"]

        response = client.post(f"{API}/likes/toggle/c/{comment['id']}", headers=fan)

        assert response.json()["message"] == "Comment liked"
        items = client.get(f"{API}/comments/{video['id']}", headers=fan).json()["data"]["items"]
        assert items[0]["likes_count"] == 1
        assert items[0]["is_liked"] is True

    def test_comment_on_hidden_video(self, client, register_user, upload_video):
        _, owner = register_user("alice")
        _, fan = register_user("bob")
        video = upload_video(owner)
        comment = client.post(f"{API}/comments/{video['id']}", json={"content": "x"}, headers=owner).json()["data"]
        client.patch(f"{API}/videos/toggle/publish/{video['id']}", headers=owner)

        assert client.post(f"{API}/likes/toggle/c/{comment['id']}", headers=fan).status_code == 404

    def test_missing_comment(self, client, register_user):
        _, headers = register_user("alice")

        assert client.post(f"{API}/likes/toggle/c/12345", headers=headers).status_code == 404


class TestTweetLikes:

    def test_toggle_tweet_like(self, client, register_user):
        alice, owner = register_user("alice")
        _, fan = register_user("bob")
        tweet = client.post(f"{API}/tweets/", json={"content": "first tweet"}, headers=owner).json()["data"]

        liked = client.post(f"{API}/likes/toggle/t/{tweet['id']}", headers=fan).json()
        unliked = client.post(f"{API}/likes/toggle/t/{tweet['id']}", headers=fan).json()

        assert liked["message"] == "Tweet liked"
        assert unliked["message"] == "Tweet unliked"
        items = client.get(f"{API}/tweets/user/{alice['id']}").json()["data"]["items"]
        assert items[0]["likes_count"] == 0
