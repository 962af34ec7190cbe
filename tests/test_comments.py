from fastapi import status

from conftest import NOW


def test_list_comments_oldest_first_with_author(client, supabase):
    supabase.responses[("comments", "select")] = [{
        "id": "c1",
        "post_id": "post-1",
        "user_id": "user-2",
        "content": "Congrats!",
        "created_at": NOW,
        "profiles": {"full_name": "Grace Hopper", "avatar_url": None},
    }]

    response = client.get("/api/v1/posts/post-1/comments")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()[0]["author"]["full_name"] == "Grace Hopper"

    [select] = supabase.calls("comments", "select")
    assert select.order_by == ("created_at", False)
    assert select.filters == [("post_id", "post-1")]


def test_empty_comment_issues_no_call(client, supabase):
    response = client.post("/api/v1/posts/post-1/comments", json={"content": "  \n "})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Comment cannot be empty"
    assert supabase.executed == []


def test_add_comment_trims_and_invalidates_thread(client, supabase, cache):
    client.get("/api/v1/posts/post-1/comments")
    assert ("comments", "post-1") in cache

    response = client.post("/api/v1/posts/post-1/comments", json={"content": " Well done "})
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["comment"]["content"] == "Well done"

    [insert] = supabase.calls("comments", "insert")
    assert insert.payload == {"user_id": "user-1", "post_id": "post-1", "content": "Well done"}
    assert ("comments", "post-1") not in cache
