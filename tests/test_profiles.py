from fastapi import status

from conftest import NOW, post_row


def profile_row(**extra):
    row = {
        "id": "user-1",
        "full_name": "Ada Lovelace",
        "headline": "Engineer",
        "bio": None,
        "avatar_url": None,
        "created_at": NOW,
    }
    row.update(extra)
    return row


def test_get_profile(client, supabase):
    supabase.responses[("profiles", "select")] = profile_row()
    response = client.get("/api/v1/profiles/user-1")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["headline"] == "Engineer"


def test_missing_profile_is_404(client, supabase):
    response = client.get("/api/v1/profiles/nobody")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Profile not found"


def test_profile_posts_newest_first(client, supabase):
    supabase.responses[("posts", "select")] = [post_row("p2"), post_row("p1")]
    response = client.get("/api/v1/profiles/user-1/posts")
    assert [p["id"] for p in response.json()] == ["p2", "p1"]

    [select] = supabase.calls("posts", "select")
    assert select.filters == [("user_id", "user-1")]
    assert select.order_by == ("created_at", True)


def test_update_profile_sends_only_given_fields(client, supabase, cache):
    cache.set(("profile", "user-1"), profile_row())
    cache.set(("posts", 20, 0), [])
    supabase.responses[("profiles", "update")] = [profile_row(headline="CTO")]

    response = client.put("/api/v1/profiles/me", data={"headline": "CTO"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["message"] == "Profile updated successfully!"

    [update] = supabase.calls("profiles", "update")
    assert update.payload == {"headline": "CTO"}
    assert update.filters == [("id", "user-1")]
    assert ("profile", "user-1") not in cache
    assert ("posts", 20, 0) not in cache
    assert supabase.uploads == []


def test_avatar_replacement_overwrites_fixed_path(client, supabase):
    supabase.responses[("profiles", "update")] = lambda query: [profile_row(**query.payload)]

    response = client.put(
        "/api/v1/profiles/me",
        files={"avatar": ("me.JPEG", b"jpeg bytes", "image/jpeg")},
    )
    assert response.status_code == status.HTTP_200_OK

    [(bucket, path, _, options)] = supabase.uploads
    assert bucket == "avatars"
    assert path == "user-1/avatar.jpeg"
    assert options["upsert"] == "true"
    assert response.json()["profile"]["avatar_url"] == "https://storage.test/avatars/user-1/avatar.jpeg"


def test_update_without_changes_returns_current_profile(client, supabase):
    supabase.responses[("profiles", "select")] = profile_row()
    response = client.put("/api/v1/profiles/me", data={})
    assert response.status_code == status.HTTP_200_OK
    assert supabase.calls("profiles", "update") == []


def test_empty_form_field_clears_value(client, supabase):
    supabase.responses[("profiles", "update")] = lambda query: [profile_row(**query.payload)]

    response = client.put(
        "/api/v1/profiles/me",
        data={"full_name": "Ada", "headline": "", "bio": ""},
    )
    assert response.status_code == status.HTTP_200_OK

    [update] = supabase.calls("profiles", "update")
    assert update.payload == {"full_name": "Ada", "headline": "", "bio": ""}
    assert response.json()["profile"]["headline"] == ""


def test_profile_edit_drops_cached_comment_threads(client, supabase, cache):
    cache.set(("comments", "post-1"), [])
    supabase.responses[("profiles", "update")] = [profile_row(full_name="Ada L.")]

    response = client.put("/api/v1/profiles/me", data={"full_name": "Ada L."})
    assert response.status_code == status.HTTP_200_OK
    assert ("comments", "post-1") not in cache
