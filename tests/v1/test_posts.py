# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for post-related endpoints."""

from fastapi import status

from kgotla.models import Notification, Post


def test_create_post(client, auth_token, test_user) -> None:
    """Test creating a new text post."""
    response = client.post(
        "/api/v1/posts",
        json={"title": "Taxi rank", "content": "New routes from Monday", "tags": ["transport"]},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["authorId"] == test_user.id
    assert data["type"] == "text"
    assert data["upvoteCount"] == 0
    assert data["downvoteCount"] == 0
    assert data["commentCount"] == 0
    assert data["allowComments"] is True


def test_create_post_requires_auth(client) -> None:
    response = client.post("/api/v1/posts", json={"content": "hello"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_create_post_empty_content_rejected(client, auth_token) -> None:
    response = client.post("/api/v1/posts", json={"content": ""}, headers=auth_token)

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_poll_requires_options(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts",
        json={"type": "poll", "content": "Best braai spot?"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_client_cannot_seed_vote_counters(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts",
        json={"content": "Counting", "upvoteCount": 50},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["upvoteCount"] == 0


def test_create_post_in_missing_group(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts",
        json={"content": "Hello group", "groupId": 999},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_anonymous_post_hides_author(client, auth_token) -> None:
    response = client.post(
        "/api/v1/posts",
        json={"content": "Asking for a friend", "isAnonymous": True},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["authorId"] is None


def test_list_posts_newest_first(client, test_post, db_session, test_user) -> None:
    newer = Post(author_id=test_user.id, content="Second")
    db_session.add(newer)
    db_session.flush()

    response = client.get("/api/v1/posts")

    assert response.status_code == status.HTTP_200_OK
    ids = [post["id"] for post in response.json()]
    assert ids[0] == newer.id
    assert test_post.id in ids


def test_list_posts_pagination(client, test_post) -> None:
    response = client.get("/api/v1/posts", params={"limit": 1, "offset": 1})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_list_posts_rejects_oversized_limit(client) -> None:
    response = client.get("/api/v1/posts", params={"limit": 10_000})

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_list_posts_by_group(client, test_post, test_group, db_session, test_user) -> None:
    in_group = Post(author_id=test_user.id, content="Group news", group_id=test_group.id)
    db_session.add(in_group)
    db_session.flush()

    response = client.get("/api/v1/posts", params={"group_id": test_group.id})

    assert [post["id"] for post in response.json()] == [in_group.id]


def test_search_posts(client, test_post) -> None:
    response = client.get("/api/v1/posts/search", params={"q": "WATER"})

    assert response.status_code == status.HTTP_200_OK
    assert [post["id"] for post in response.json()] == [test_post.id]


def test_blank_search_returns_nothing(client, test_post) -> None:
    response = client.get("/api/v1/posts/search", params={"q": "   "})

    assert response.json() == []


def test_get_post(client, test_post) -> None:
    response = client.get(f"/api/v1/posts/{test_post.id}")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["content"] == test_post.content


def test_get_nonexistent_post(client) -> None:
    response = client.get("/api/v1/posts/99999")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_update_post(client, auth_token, test_post) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"content": "Water is back", "allowComments": False},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["content"] == "Water is back"
    assert response.json()["allowComments"] is False


def test_update_post_by_other_user_forbidden(client, other_auth_token, test_post) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"content": "Hijacked"},
        headers=other_auth_token,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_delete_post_hides_it(client, auth_token, test_post) -> None:
    response = client.delete(f"/api/v1/posts/{test_post.id}", headers=auth_token)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/posts/{test_post.id}").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/v1/posts").json() == []


def test_delete_post_by_other_user_forbidden(client, other_auth_token, test_post) -> None:
    response = client.delete(f"/api/v1/posts/{test_post.id}", headers=other_auth_token)

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_comment_on_post(client, other_auth_token, test_post, test_user, db_session) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Same here"},
        headers=other_auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["parentId"] is None
    db_session.refresh(test_post)
    assert test_post.comment_count == 1

    notifications = db_session.query(Notification).filter_by(user_id=test_user.id).all()
    assert [n.type for n in notifications] == ["comment"]


def test_reply_to_comment(client, auth_token, test_post, test_comment) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Thanks", "parentId": test_comment.id},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["parentId"] == test_comment.id


def test_reply_to_missing_parent(client, auth_token, test_post) -> None:
    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Orphan", "parentId": 4242},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_comments_disabled(client, auth_token, test_post, db_session) -> None:
    test_post.allow_comments = False
    db_session.flush()

    response = client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Let me in"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_post_comments_as_tree(client, auth_token, test_post, test_comment) -> None:
    client.post(
        f"/api/v1/posts/{test_post.id}/comments",
        json={"content": "Reply", "parentId": test_comment.id},
        headers=auth_token,
    )

    response = client.get(f"/api/v1/posts/{test_post.id}/comments")

    assert response.status_code == status.HTTP_200_OK
    tree = response.json()
    assert len(tree) == 1
    assert tree[0]["id"] == test_comment.id
    assert [reply["content"] for reply in tree[0]["replies"]] == ["Reply"]


def test_update_post_rejects_null_content(client, auth_token, test_post) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"content": None},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_post_rejects_null_allow_comments(client, auth_token, test_post) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"allowComments": None},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_post_allows_clearing_optional_fields(client, auth_token, test_post) -> None:
    response = client.put(
        f"/api/v1/posts/{test_post.id}",
        json={"title": None},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["title"] is None
    assert response.json()["content"] == test_post.content
