"""
Tests for the paginated video feed pipeline.
"""

from app.config import settings
from app.db.models.like import Like
from app.services.feed import MAX_OFFSET, clamp_pagination
from app.services.video_service import video_service


class TestClampPagination:

    def test_defaults(self):
        assert clamp_pagination(None, None) == (1, settings.DEFAULT_PAGE_SIZE)

    def test_page_below_one(self):
        assert clamp_pagination(0, 10) == (1, 10)
        assert clamp_pagination(-4, 10) == (1, 10)

    def test_limit_bounds(self):
        assert clamp_pagination(1, 1000) == (1, settings.MAX_PAGE_SIZE)
        assert clamp_pagination(1, -1) == (1, 1)

    def test_huge_page_keeps_offset_in_range(self):
        page, limit = clamp_pagination(10 ** 30, 50)

        assert limit == 50
        assert (page - 1) * limit <= MAX_OFFSET


class TestVideoFeed:
    """Filters, counts, sorting and page windows."""

    def test_pages_cover_every_video_once(self, db_session, make_db_user, make_db_video):
        owner = make_db_user("alice")
        for i in range(25):
            make_db_video(owner, title=f"Video {i:02d}")

        pages = [video_service.list_videos(db_session, None, page=p, limit=10) for p in (1, 2, 3)]

        assert [len(p.items) for p in pages] == [10, 10, 5]
        ids = [item.id for p in pages for item in p.items]
        assert len(set(ids)) == 25
        assert pages[0].total == 25
        assert pages[0].total_pages == 3
        assert pages[0].has_next_page is True
        assert pages[0].has_prev_page is False
        assert pages[2].has_next_page is False

    def test_page_past_the_end_is_empty(self, db_session, make_db_user, make_db_video):
        owner = make_db_user("alice")
        make_db_video(owner)

        page = video_service.list_videos(db_session, None, page=5, limit=10)

        assert page.items == []
        assert page.total == 1

    def test_empty_feed(self, db_session):
        page = video_service.list_videos(db_session, None)

        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 0

    def test_title_search(self, db_session, make_db_user, make_db_video):
        owner = make_db_user("alice")
        make_db_video(owner, title="Python basics")
        make_db_video(owner, title="Cooking pasta")
        make_db_video(owner, title="Advanced PYTHON")

        page = video_service.list_videos(db_session, None, query="python")

        assert sorted(item.title for item in page.items) == ["Advanced PYTHON", "Python basics"]
        assert page.total == 2

    def test_search_treats_wildcards_literally(self, db_session, make_db_user, make_db_video):
        owner = make_db_user("alice")
        make_db_video(owner, title="100% real")
        make_db_video(owner, title="1000 real")

        page = video_service.list_videos(db_session, None, query="100%")

        assert [item.title for item in page.items] == ["100% real"]

    def test_sort_by_views(self, db_session, make_db_user, make_db_video):
        owner = make_db_user("alice")
        for views in (5, 50, 1):
            make_db_video(owner, title=f"v{views}", views=views)

        desc = video_service.list_videos(db_session, None, sort_by="views", sort_type="desc")
        asc = video_service.list_videos(db_session, None, sort_by="views", sort_type="asc")

        assert [item.views for item in desc.items] == [50, 5, 1]
        assert [item.views for item in asc.items] == [1, 5, 50]

    def test_unknown_sort_field_falls_back(self, db_session, make_db_user, make_db_video):
        owner = make_db_user("alice")
        first = make_db_video(owner, title="first")
        second = make_db_video(owner, title="second")

        page = video_service.list_videos(db_session, None, sort_by="hashed_password")

        assert [item.id for item in page.items] == [first.id, second.id]

    def test_owner_filter(self, db_session, make_db_user, make_db_video):
        alice = make_db_user("alice")
        bob = make_db_user("bob")
        make_db_video(alice, title="a")
        make_db_video(bob, title="b")

        page = video_service.list_videos(db_session, None, owner_id=bob.id)

        assert [item.title for item in page.items] == ["b"]
        assert page.items[0].owner.username == "bob"


class TestFeedVisibility:

    def test_unpublished_hidden_from_others(self, db_session, make_db_user, make_db_video):
        alice = make_db_user("alice")
        bob = make_db_user("bob")
        make_db_video(alice, title="public")
        make_db_video(alice, title="draft", is_published=False)

        anonymous = video_service.list_videos(db_session, None)
        other = video_service.list_videos(db_session, bob.id)
        owner = video_service.list_videos(db_session, alice.id)

        assert [item.title for item in anonymous.items] == ["public"]
        assert [item.title for item in other.items] == ["public"]
        assert sorted(item.title for item in owner.items) == ["draft", "public"]
        assert anonymous.total == 1


class TestFeedCounts:

    def test_likes_count_and_liked_flag(self, db_session, make_db_user, make_db_video):
        alice = make_db_user("alice")
        bob = make_db_user("bob")
        carol = make_db_user("carol")
        video = make_db_video(alice)
        db_session.add_all([
            Like(video_id=video.id, liked_by_id=bob.id),
            Like(video_id=video.id, liked_by_id=carol.id),
        ])
        db_session.commit()

        as_bob = video_service.list_videos(db_session, bob.id).items[0]
        as_alice = video_service.list_videos(db_session, alice.id).items[0]
        anonymous = video_service.list_videos(db_session, None).items[0]

        assert as_bob.likes_count == 2
        assert as_bob.is_liked is True
        assert as_alice.is_liked is False
        assert anonymous.is_liked is False
        assert anonymous.comments_count == 0

    def test_liked_by_filter(self, db_session, make_db_user, make_db_video):
        alice = make_db_user("alice")
        bob = make_db_user("bob")
        liked = make_db_video(alice, title="liked")
        make_db_video(alice, title="not liked")
        db_session.add(Like(video_id=liked.id, liked_by_id=bob.id))
        db_session.commit()

        page = video_service.list_videos(db_session, bob.id, liked_by=bob.id)

        assert [item.title for item in page.items] == ["liked"]
        assert page.total == 1


class TestFeedPageBounds:

    def test_huge_page_number_is_an_empty_page(self, client, register_user, upload_video):
        _, headers = register_user("alice")
        upload_video(headers)

        response = client.get("/api/v1/videos/", params={"page": 10 ** 18, "limit": 50})

        assert response.status_code == 200
        page = response.json()["data"]
        assert page["items"] == []
        assert page["total"] == 1
        assert page["has_next_page"] is False
