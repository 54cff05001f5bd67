import pytest

HOUSING = {
    "user_id": 1,
    "title": "Housing",
    "type": "expense",
    "description": "Rent and bills",
}


@pytest.fixture
def housing(services):
    return services.categories.create(1, "Housing", "expense", "Rent and bills")


class TestCategoryEndpoints:
    """Tests for the /category endpoints."""

    def test_create_category(self, client, auth_headers):
        """Test creating a category."""
        response = client.post("/category", json=HOUSING, headers=auth_headers(1))

        assert response.status_code == 200
        body = response.get_json()
        assert body["id"] > 0
        assert body["user_id"] == 1
        assert body["title"] == "Housing"
        assert body["type"] == "expense"
        assert body["description"] == "Rent and bills"
        assert "created_at" in body

    def test_create_category_missing_type(self, client, auth_headers):
        """Test that type is required."""
        payload = {k: v for k, v in HOUSING.items() if k != "type"}

        response = client.post("/category", json=payload, headers=auth_headers(1))

        assert response.status_code == 400
        assert response.get_json() == {"error": "type: Field required"}

    def test_create_category_for_another_user(self, client, auth_headers):
        """Test that a caller cannot create categories for someone else."""
        response = client.post("/category", json=HOUSING, headers=auth_headers(2))

        assert response.status_code == 403

    def test_get_category(self, client, auth_headers, housing):
        """Test fetching a category by id."""
        response = client.get(f"/category/{housing.id}", headers=auth_headers(1))

        assert response.status_code == 200
        assert response.get_json() == housing.to_dict()

    def test_get_category_not_found(self, client, auth_headers):
        """Test fetching a missing category is a 404."""
        response = client.get("/category/999", headers=auth_headers(1))

        assert response.status_code == 404
        assert response.get_json() == {"error": "Category with ID 999 not found"}

    def test_get_category_of_another_user(self, client, auth_headers, housing):
        """Test that reading someone else's category is forbidden."""
        response = client.get(f"/category/{housing.id}", headers=auth_headers(2))

        assert response.status_code == 403

    def test_list_categories(self, client, auth_headers, services, housing):
        """Test listing with an empty title filter returns every category."""
        services.categories.create(1, "Food", "expense", "Groceries")
        services.categories.create(1, "Salary", "income", "Pay")

        response = client.get(
            "/category",
            query_string={"user_id": 1, "type": "expense", "title": ""},
            headers=auth_headers(1),
        )

        assert response.status_code == 200
        assert [c["title"] for c in response.get_json()] == ["Food", "Housing"]

    def test_list_categories_description_filter(self, client, auth_headers, services, housing):
        """Test the description substring filter."""
        services.categories.create(1, "Food", "expense", "Groceries")

        response = client.get(
            "/category",
            query_string={"user_id": 1, "type": "expense", "description": "bills"},
            headers=auth_headers(1),
        )

        assert [c["title"] for c in response.get_json()] == ["Housing"]

    def test_update_category_preserves_omitted_description(
        self, client, auth_headers, housing
    ):
        """Test patch semantics for categories."""
        response = client.put(
            "/category", json={"id": housing.id, "title": "Home"}, headers=auth_headers(1)
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["title"] == "Home"
        assert body["description"] == "Rent and bills"

    def test_update_category_type_is_immutable(self, client, auth_headers, housing):
        """Test that type in an update body is ignored."""
        response = client.put(
            "/category",
            json={"id": housing.id, "type": "income"},
            headers=auth_headers(1),
        )

        assert response.status_code == 200
        assert response.get_json()["type"] == "expense"

    def test_update_category_not_found(self, client, auth_headers):
        """Test updating a missing category is a 404."""
        response = client.put(
            "/category", json={"id": 999, "title": "x"}, headers=auth_headers(1)
        )

        assert response.status_code == 404

    def test_delete_category(self, client, auth_headers, services, housing):
        """Test deleting returns true and removes the row."""
        response = client.delete(f"/category/{housing.id}", headers=auth_headers(1))

        assert response.status_code == 200
        assert response.get_json() is True
        assert services.categories.find(housing.id) is None

    def test_delete_category_not_found(self, client, auth_headers):
        """Test deleting a missing category is a 404, like accounts."""
        response = client.delete("/category/999", headers=auth_headers(1))

        assert response.status_code == 404

    def test_delete_category_of_another_user(self, client, auth_headers, services, housing):
        """Test that deleting someone else's category is forbidden."""
        response = client.delete(f"/category/{housing.id}", headers=auth_headers(2))

        assert response.status_code == 403
        assert services.categories.find(housing.id) is not None
