def add(client, **fields):
    data = {"title": "", "author": "", "isbn": "", "rating": "", "date_read": "", "notes": ""}
    data.update(fields)
    return client.post("/add", data=data, follow_redirects=False)


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_home_empty(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "No books yet." in response.text


def test_add_book_redirects_home(client):
    response = add(client, title="Clean Code", author="Martin", isbn="9780132350884")
    assert response.status_code == 303
    assert response.headers["location"] == "/"

    home = client.get("/")
    assert "Clean Code" in home.text
    assert "https://covers.openlibrary.org/b/isbn/9780132350884-M.jpg" in home.text


def test_add_book_without_isbn_shows_placeholder(client):
    add(client, title="Dune", author="Herbert")
    assert "/images/no-cover.svg" in client.get("/").text


def test_add_book_requires_title_and_author(client):
    response = add(client, title="Dune")
    assert response.status_code == 400
    assert "author" in response.text.lower()
    assert "No books yet." in client.get("/").text


def test_sort_param_is_echoed_and_unknown_falls_back(client):
    add(client, title="Beta", author="B", rating="3")
    add(client, title="Alpha", author="A", rating="5")
    rating_page = client.get("/?sort=rating").text
    assert rating_page.index("Alpha") < rating_page.index("Beta")
    assert '<option value="rating" selected>' in rating_page

    weird = client.get("/?sort=whatever").text
    assert '<option value="recency" selected>' in weird


def test_edit_form_formats_date(client):
    add(client, title="Dune", author="Herbert", date_read="2024-03-09")
    response = client.get("/edit/1")
    assert response.status_code == 200
    assert 'value="2024-03-09"' in response.text


def test_edit_and_detail(client):
    add(client, title="Dune", author="Herbert", notes="spice")
    response = client.post("/edit/1", data={"title": "Dune", "author": "Frank Herbert", "rating": "5"},
                           follow_redirects=False)
    assert response.status_code == 303

    detail = client.get("/book/1")
    assert detail.status_code == 200
    assert "Frank Herbert" in detail.text
    assert "Rating: 5.0" in detail.text
    assert "spice" not in detail.text


def test_missing_book_is_404(client):
    assert client.get("/book/99").status_code == 404
    assert client.get("/edit/99").status_code == 404
    response = client.post("/edit/99", data={"title": "Dune", "author": "Herbert"}, follow_redirects=False)
    assert response.status_code == 404


def test_delete_is_idempotent(client):
    add(client, title="Dune", author="Herbert")
    assert client.post("/delete/1", follow_redirects=False).status_code == 303
    assert client.post("/delete/1", follow_redirects=False).status_code == 303
    assert client.get("/book/1").status_code == 404


def test_placeholder_image_is_served(client):
    response = client.get("/images/no-cover.svg")
    assert response.status_code == 200
    assert "svg" in response.headers["content-type"]
