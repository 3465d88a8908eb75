import unittest
from datetime import datetime, timezone
from types import SimpleNamespace as Obj
from unittest.mock import patch
from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from core.exceptions import NotFoundError, ConflictError, InvalidSortError


def _company(**kw):
    data = dict(id=1, name="Acme", tax_id="1234567890", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    data.update(kw)
    return Obj(**data)


def _page(items, total=None, page=0, size=20):
    total = len(items) if total is None else total
    return {"items": items, "total": total, "page": page, "size": size, "pages": 1 if total else 0}


class CompanyRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)

    # --- LIST ---

    @patch("company.router.service.get_companies_page")
    def test_list_companies_page_envelope(self, mock_page):
        mock_page.return_value = _page([_company()])
        resp = self.client.get("/api/companies")
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["total"], 1)
        self.assertEqual(body["items"][0]["taxId"], "1234567890")
        self.assertIn("createdAt", body["items"][0])

        params = mock_page.call_args.args[1]
        self.assertEqual((params.page, params.size, params.sort), (0, 20, []))

    @patch("company.router.service.get_companies_page")
    def test_list_companies_passes_paging_and_sort(self, mock_page):
        mock_page.return_value = _page([], page=2, size=5)
        resp = self.client.get("/api/companies?page=2&size=5&sort=name,desc&sort=id")
        self.assertEqual(resp.status_code, 200, resp.text)
        params = mock_page.call_args.args[1]
        self.assertEqual(params.page, 2)
        self.assertEqual(params.size, 5)
        self.assertEqual(params.sort, ["name,desc", "id"])

    @patch("company.router.service.get_companies_page")
    def test_list_companies_unknown_sort_400(self, mock_page):
        mock_page.side_effect = InvalidSortError("bogus", "Company")
        resp = self.client.get("/api/companies?sort=bogus")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"bogus": "No property 'bogus' found for type 'Company'"})

    def test_list_companies_negative_page_400(self):
        resp = self.client.get("/api/companies?page=-1")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("page", resp.json())

    # --- FIND ---

    @patch("company.router.service.find_companies")
    def test_find_passes_both_minimums(self, mock_find):
        mock_find.return_value = _page([_company()])
        resp = self.client.get("/api/companies/find?minDepartments=2&minEmployees=5")
        self.assertEqual(resp.status_code, 200, resp.text)
        kwargs = mock_find.call_args.kwargs
        self.assertEqual(kwargs["min_departments"], 2)
        self.assertEqual(kwargs["min_employees"], 5)

    @patch("company.router.service.find_companies")
    def test_find_without_filters(self, mock_find):
        mock_find.return_value = _page([])
        resp = self.client.get("/api/companies/find")
        self.assertEqual(resp.status_code, 200, resp.text)
        kwargs = mock_find.call_args.kwargs
        self.assertIsNone(kwargs["min_departments"])
        self.assertIsNone(kwargs["min_employees"])

    # --- GET /{id} ---

    @patch("company.router.service.get_company")
    def test_get_company_200(self, mock_get):
        mock_get.return_value = _company(id=7, name="Globex")
        resp = self.client.get("/api/companies/7")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["name"], "Globex")

    @patch("company.router.service.get_company")
    def test_get_company_404(self, mock_get):
        mock_get.side_effect = NotFoundError("Company", 99)
        resp = self.client.get("/api/companies/99")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Company(99) not found")

    @patch("company.router.service.company_exists")
    def test_exists(self, mock_exists):
        mock_exists.return_value = False
        resp = self.client.get("/api/companies/3/exists")
        self.assertEqual(resp.status_code, 200)
        self.assertIs(resp.json(), False)

    # --- CREATE ---

    @patch("company.router.service.create_company")
    def test_create_company_201(self, mock_create):
        mock_create.return_value = _company(id=10)
        resp = self.client.post("/api/companies", json={"name": "Acme", "taxId": "1234567890"})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["id"], 10)
        dto = mock_create.call_args.args[1]
        self.assertEqual(dto.tax_id, "1234567890")

    def test_create_company_reports_every_invalid_field(self):
        resp = self.client.post("/api/companies", json={"name": "  ", "taxId": "12AB"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {
            "name": "Company name is required",
            "taxId": "Tax ID must be exactly 10 digits",
        })

    @patch("company.router.service.create_company")
    def test_create_company_tax_id_with_trailing_newline_400(self, mock_create):
        resp = self.client.post("/api/companies", json={"name": "Acme", "taxId": "1234567890\n"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"taxId": "Tax ID must be exactly 10 digits"})
        mock_create.assert_not_called()

    def test_create_company_name_too_long(self):
        resp = self.client.post("/api/companies", json={"name": "x" * 101, "taxId": "1234567890"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["name"], "Company name cannot exceed 100 characters")

    def test_create_company_missing_tax_id(self):
        resp = self.client.post("/api/companies", json={"name": "Acme"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("taxId", resp.json())

    @patch("company.router.service.create_company")
    def test_create_company_duplicate_tax_id_400(self, mock_create):
        mock_create.side_effect = ConflictError("Company with tax ID already exists: 1234567890")
        resp = self.client.post("/api/companies", json={"name": "Acme", "taxId": "1234567890"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Company with tax ID already exists: 1234567890")

    def test_create_company_rejects_non_json_body(self):
        resp = self.client.post(
            "/api/companies",
            content="name=Acme",
            headers={"Content-Type": "text/plain"},
        )
        self.assertEqual(resp.status_code, 415)

    # --- DELETE ---

    @patch("company.router.service.delete_company")
    def test_delete_company_204(self, mock_delete):
        resp = self.client.delete("/api/companies/4")
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(resp.content, b"")
        self.assertEqual(mock_delete.call_args.args[1], 4)

    @patch("company.router.service.delete_company")
    def test_delete_company_with_employees_400(self, mock_delete):
        mock_delete.side_effect = ConflictError(
            "Cannot delete company with existing employees. Transfer or remove employees first."
        )
        resp = self.client.delete("/api/companies/4")
        self.assertEqual(resp.status_code, 400)
        self.assertTrue(resp.json()["detail"].startswith("Cannot delete company with existing employees"))

    # --- UNEXPECTED ---

    @patch("company.router.service.get_company")
    def test_unexpected_error_500(self, mock_get):
        mock_get.side_effect = RuntimeError("db exploded")
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/api/companies/1")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"detail": "Internal server error"})


if __name__ == "__main__":
    unittest.main()
