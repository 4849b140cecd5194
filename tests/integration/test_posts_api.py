# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Integration tests for the news post endpoints.

Assumptions:
- Only published posts of type "post" are listed, newest first
- Page size is 9
- Missing category falls back to "Umum"/"umum"
"""
from datetime import datetime, timedelta

import pytest

from lppm.wordpress.formatting import NO_IMAGE_PLACEHOLDER


@pytest.fixture
def news(wp):
    """Two categorized posts, one uncategorized, plus rows that must not show."""
    berita = wp.term("Berita", "berita")
    pengumuman = wp.term("Pengumuman", "pengumuman")

    old = wp.post(title="Hibah Penelitian", content="<p>Pendaftaran hibah dibuka</p>",
                  date=datetime(2025, 1, 10, 8, 0))
    wp.assign(old, pengumuman)

    new = wp.post(title="Seminar Nasional", content='<div class="ng-a"><p>Seminar</p></div>',
                  date=datetime(2025, 11, 20, 9, 30))
    wp.assign(new, berita)
    wp.thumbnail(new, "http://lppm.unila.ac.id/wp-content/uploads/seminar.jpg")

    plain = wp.post(title="Tanpa Kategori", date=datetime(2025, 6, 1))

    wp.post(title="Draft", status="draft", date=datetime(2025, 12, 1))
    wp.post(title="Halaman Profil", post_type="page", date=datetime(2025, 12, 1))

    return {"old": old, "new": new, "plain": plain}


@pytest.mark.integration
def test_list_posts(client, news):
    response = client.get("/api/posts")
    assert response.status_code == 200
    body = response.json()

    assert body["status"] == "success"
    assert [p["title"] for p in body["data"]] == [
        "Seminar Nasional", "Tanpa Kategori", "Hibah Penelitian"
    ]

    first = body["data"][0]
    assert first["id"] == news["new"].id
    assert first["slug"] == "seminar-nasional"
    assert first["date"] == "20 Nov 2025"
    assert first["category"] == "Berita"
    assert first["category_slug"] == "berita"
    assert first["thumbnail"] == "https://lppm.unila.ac.id/wp-content/uploads/seminar.jpg"
    assert first["excerpt"] == "Seminar"

    plain = body["data"][1]
    assert plain["category"] == "Umum"
    assert plain["category_slug"] == "umum"
    assert plain["thumbnail"] == NO_IMAGE_PLACEHOLDER

    assert body["pagination"]["total"] == 3
    assert body["pagination"]["per_page"] == 9
    assert body["pagination"]["current_page"] == 1
    assert body["pagination"]["last_page"] == 1
    assert body["pagination"]["next_page_url"] is None
    assert body["pagination"]["prev_page_url"] is None


@pytest.mark.integration
def test_list_posts_keyword_matches_title_or_content(client, news):
    response = client.get("/api/posts", params={"keyword": "hibah"})
    assert [p["title"] for p in response.json()["data"]] == ["Hibah Penelitian"]

    response = client.get("/api/posts", params={"keyword": "Seminar"})
    assert [p["title"] for p in response.json()["data"]] == ["Seminar Nasional"]


@pytest.mark.integration
def test_list_posts_category_filter(client, news):
    response = client.get("/api/posts", params={"category": "pengumuman"})
    body = response.json()
    assert [p["title"] for p in body["data"]] == ["Hibah Penelitian"]
    assert body["pagination"]["total"] == 1


@pytest.mark.integration
def test_list_posts_pagination(client, wp):
    start = datetime(2025, 1, 1)
    for i in range(11):
        wp.post(title=f"Berita {i}", date=start + timedelta(days=i))

    first = client.get("/api/posts").json()
    assert len(first["data"]) == 9
    assert first["data"][0]["title"] == "Berita 10"
    assert first["pagination"]["last_page"] == 2
    assert "page=2" in first["pagination"]["next_page_url"]
    assert first["pagination"]["prev_page_url"] is None

    second = client.get("/api/posts", params={"page": 2}).json()
    assert [p["title"] for p in second["data"]] == ["Berita 1", "Berita 0"]
    assert second["pagination"]["current_page"] == 2
    assert second["pagination"]["next_page_url"] is None
    assert "page=1" in second["pagination"]["prev_page_url"]


@pytest.mark.integration
def test_list_posts_page_below_one_is_first_page(client, news):
    body = client.get("/api/posts", params={"page": 0}).json()
    assert body["pagination"]["current_page"] == 1
    assert len(body["data"]) == 3


@pytest.mark.integration
def test_post_in_two_categories_listed_once(client, wp):
    post = wp.post(title="Dua Kategori")
    wp.assign(post, wp.term("Berita", "berita"))
    wp.assign(post, wp.term("Agenda", "agenda"))

    body = client.get("/api/posts").json()
    assert [p["title"] for p in body["data"]] == ["Dua Kategori"]
    assert body["pagination"]["total"] == 1


@pytest.mark.integration
def test_show_post(client, news):
    response = client.get(f"/api/posts/{news['new'].id}")
    assert response.status_code == 200
    data = response.json()["data"]

    assert data["id"] == news["new"].id
    assert data["title"] == "Seminar Nasional"
    assert data["slug"] == "seminar-nasional"
    assert data["date"] == "Thursday, 20 November 2025"
    assert data["category"] == "Berita"
    assert data["image"] == "https://lppm.unila.ac.id/wp-content/uploads/seminar.jpg"
    assert data["content"] == "<p>Seminar</p>"


@pytest.mark.integration
def test_show_post_defaults(client, news):
    data = client.get(f"/api/posts/{news['plain'].id}").json()["data"]
    assert data["category"] == "Umum"
    assert data["image"] == NO_IMAGE_PLACEHOLDER


@pytest.mark.integration
def test_show_unpublished_post_is_404(client, wp):
    draft = wp.post(title="Draft", status="draft")

    response = client.get(f"/api/posts/{draft.id}")

    assert response.status_code == 404
    assert response.json() == {"message": "Berita tidak ditemukan"}


@pytest.mark.integration
def test_show_missing_post_is_404(client):
    assert client.get("/api/posts/999").status_code == 404


@pytest.mark.integration
def test_categories(client, wp):
    wp.term("Pengumuman", "pengumuman", count=2)
    wp.term("Berita", "berita", count=5)
    wp.term("Kosong", "kosong", count=0)
    wp.term("Dokumen", "dokumen", taxonomy="wpdmcategory", count=3)

    response = client.get("/api/posts/categories")

    assert response.status_code == 200
    assert [c["slug"] for c in response.json()["data"]] == ["berita", "pengumuman"]
    assert set(response.json()["data"][0]) == {"term_id", "name", "slug"}
