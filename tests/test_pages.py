from fastapi import status

from conftest import NOW, post_row


def test_home_page_renders_post_cards(client, supabase):
    supabase.responses[("profiles", "select")] = {"id": "user-1", "full_name": "Ada Lovelace"}
    supabase.responses[("posts", "select")] = [
        post_row("p1", user_id="user-1"),
        post_row("p2", user_id="user-2"),
    ]
    supabase.responses[("likes", "select")] = lambda query: (
        [{"id": "l1", "post_id": "p2", "user_id": "user-1", "created_at": NOW}]
        if ("post_id", "p2") in query.filters else []
    )

    response = client.get("/api/v1/pages/home")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["navbar"]["display_name"] == "Ada Lovelace"
    assert body["composer"]["avatar_fallback"] == "A"

    mine, theirs = body["feed"]
    assert mine["is_owner"] is True and mine["like_count"] == 0
    assert theirs["is_owner"] is False
    assert theirs["liked_by_me"] is True and theirs["like_count"] == 1
    assert theirs["author"]["headline"] == "Engineer"


def test_home_page_shares_cache_with_endpoints(client, supabase):
    supabase.responses[("posts", "select")] = [post_row("p1")]
    client.get("/api/v1/pages/home")
    client.get("/api/v1/posts")
    client.get("/api/v1/posts/p1/likes")
    assert len(supabase.calls("posts", "select")) == 1
    assert len(supabase.calls("likes", "select")) == 1

    client.post("/api/v1/posts/p1/likes/toggle")
    client.get("/api/v1/pages/home")
    # the toggle reloaded the likes, so the page reads them from the cache
    assert len(supabase.calls("likes", "select")) == 2


def test_profile_page_of_someone_else(client, supabase):
    supabase.responses[("profiles", "select")] = lambda query: {
        "id": dict(query.filters)["id"], "full_name": "Grace Hopper", "headline": "Admiral",
    }

    response = client.get("/api/v1/pages/profile/user-2")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["is_own_profile"] is False
    assert body["profile"]["id"] == "user-2"
    assert body["post_count"] == 0
    assert body["posts"] == []


def test_own_profile_page(client, supabase):
    supabase.responses[("profiles", "select")] = {"id": "user-1", "full_name": "Ada Lovelace"}
    supabase.responses[("posts", "select")] = [post_row("p1")]

    body = client.get("/api/v1/pages/profile/user-1").json()
    assert body["is_own_profile"] is True
    assert body["post_count"] == 1
    assert body["posts"][0]["is_owner"] is True
    assert len(supabase.calls("profiles", "select")) == 1


def test_profile_page_for_unknown_user(client):
    response = client.get("/api/v1/pages/profile/ghost")
    assert response.status_code == status.HTTP_404_NOT_FOUND
