"""
Tests for the channel dashboard and healthcheck endpoints.
"""

from conftest import API


class TestDashboard:

    def test_stats_aggregate_channel_activity(self, client, register_user, upload_video):
        alice, owner = register_user("alice")
        _, fan = register_user("bob")
        first = upload_video(owner, title="first")
        upload_video(owner, title="second")
        client.get(f"{API}/videos/{first['id']}", headers=fan)
        client.get(f"{API}/videos/{first['id']}", headers=fan)
        client.post(f"{API}/likes/toggle/v/{first['id']}", headers=fan)
        comment = client.post(f"{API}/comments/{first['id']}", json={"content": "own"}, headers=owner).json()["data"]
        client.post(f"{API}/likes/toggle/c/{comment['id']}", headers=fan)
        tweet = client.post(f"{API}/tweets/", json={"content": "news"}, headers=owner).json()["data"]
        client.post(f"{API}/likes/toggle/t/{tweet['id']}", headers=fan)
        client.post(f"{API}/subscriptions/c/{alice['id']}", headers=fan)

        stats = client.get(f"{API}/dashboard/stats", headers=owner).json()["data"]

        assert stats == {
            "total_videos": 2,
            "total_views": 2,
            "total_subscribers": 1,
            "total_video_likes": 1,
            "total_comment_likes": 1,
            "total_tweet_likes": 1,
        }

    def test_new_channel_has_zero_stats(self, client, register_user):
        _, headers = register_user("alice")

        stats = client.get(f"{API}/dashboard/stats", headers=headers).json()["data"]

        assert set(stats.values()) == {0}

    def test_channel_videos_include_unpublished(self, client, register_user, upload_video):
        _, headers = register_user("alice")
        draft = upload_video(headers, title="draft")
        upload_video(headers, title="live")
        client.patch(f"{API}/videos/toggle/publish/{draft['id']}", headers=headers)

        videos = client.get(f"{API}/dashboard/videos", headers=headers).json()["data"]

        assert sorted(v["title"] for v in videos) == ["draft", "live"]

    def test_requires_authentication(self, client):
        assert client.get(f"{API}/dashboard/stats").status_code == 401


class TestHealthcheck:

    def test_healthcheck(self, client):
        response = client.get(f"{API}/healthcheck/")

        assert response.status_code == 200
        assert response.json() == {
            "status_code": 200,
            "data": "OK",
            "message": "Healthcheck successful",
            "success": True,
        }

    def test_unknown_route_uses_failure_envelope(self, client):
        response = client.get(f"{API}/does-not-exist")

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert response.json()["data"] is None
