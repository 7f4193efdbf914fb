"""HTTP tests for the admin console: login gate, toasts, CRUD routes, 404."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient

from botadmin.admin.server import create_app

PASSWORD = "rahasia-test"
EIGHT_HOURS = 8 * 60 * 60


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class AdminRoutesTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)
        self.clock = FakeClock()
        self.app = create_app(
            data_dir=self.data_dir,
            admin_pass=PASSWORD,
            session_secret="test-secret",
            app_env="development",
            clock=self.clock,
        )
        self.client = TestClient(self.app)

    def tearDown(self):
        self.client.close()
        self._tmp.cleanup()

    def login(self):
        r = self.client.post("/login", data={"password": PASSWORD}, follow_redirects=False)
        self.assertEqual(r.status_code, 302)
        self.assertEqual(r.headers["location"], "/dashboard")

    def seed(self, filename, items):
        (self.data_dir / filename).write_text(json.dumps(items), encoding="utf-8")

    def raw(self, filename):
        return json.loads((self.data_dir / filename).read_text(encoding="utf-8"))


class TestLoginGate(AdminRoutesTestCase):
    def test_health_is_public(self):
        r = self.client.get("/health")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json(), {"status": "ok"})

    def test_pages_redirect_to_login_when_anonymous(self):
        for path in ("/", "/dashboard", "/produk", "/faq", "/sop", "/promo", "/claim",
                     "/blacklist", "/buyers", "/claims-replace", "/claims-reset"):
            with self.subTest(path=path):
                r = self.client.get(path, follow_redirects=False)
                self.assertEqual(r.status_code, 302)
                self.assertEqual(r.headers["location"], "/login")

    def test_mutations_redirect_to_login_when_anonymous(self):
        r = self.client.post("/faq/save", data={"idx": "", "question": "q", "answer": "a"}, follow_redirects=False)
        self.assertEqual(r.status_code, 302)
        self.assertEqual(r.headers["location"], "/login")
        self.assertFalse((self.data_dir / "faq.json").exists())

    def test_login_form_renders(self):
        r = self.client.get("/login")
        self.assertEqual(r.status_code, 200)
        self.assertIn('name="password"', r.text)

    def test_wrong_password_shows_error_and_grants_nothing(self):
        r = self.client.post("/login", data={"password": "salah"}, follow_redirects=False)
        self.assertEqual(r.status_code, 200)
        self.assertIn("Password salah!", r.text)
        r = self.client.get("/dashboard", follow_redirects=False)
        self.assertEqual(r.status_code, 302)

    def test_login_then_dashboard(self):
        self.login()
        r = self.client.get("/dashboard")
        self.assertEqual(r.status_code, 200)
        self.assertIn("Dashboard", r.text)
        r = self.client.get("/")
        self.assertEqual(r.status_code, 200)

    def test_session_expires_eight_hours_after_login(self):
        self.login()
        self.clock.now += EIGHT_HOURS - 60
        self.assertEqual(self.client.get("/faq", follow_redirects=False).status_code, 200)
        self.clock.now += 60
        r = self.client.get("/faq", follow_redirects=False)
        self.assertEqual(r.status_code, 302)
        self.assertEqual(r.headers["location"], "/login")

    def test_logout(self):
        self.login()
        r = self.client.get("/logout", follow_redirects=False)
        self.assertEqual(r.status_code, 302)
        self.assertEqual(r.headers["location"], "/login")
        self.assertEqual(self.client.get("/dashboard", follow_redirects=False).status_code, 302)

    def test_unknown_route_renders_404(self):
        r = self.client.get("/does-not-exist")
        self.assertEqual(r.status_code, 404)
        self.assertIn("tidak ditemukan", r.text)


class TestToastDelivery(AdminRoutesTestCase):
    def test_toast_shown_once(self):
        self.login()
        self.client.post("/faq/save", data={"idx": "", "question": "q", "answer": "a"}, follow_redirects=False)
        first = self.client.get("/faq")
        self.assertIn("FAQ berhasil disimpan.", first.text)
        second = self.client.get("/faq")
        self.assertNotIn("FAQ berhasil disimpan.", second.text)

    def test_not_found_ref_sets_danger_toast_without_write(self):
        self.login()
        r = self.client.post("/faq/delete", data={"idx": "5"}, follow_redirects=False)
        self.assertEqual(r.headers["location"], "/faq")
        self.assertFalse((self.data_dir / "faq.json").exists())
        page = self.client.get("/faq")
        self.assertIn("toast-danger", page.text)
        self.assertIn("Data tidak ditemukan", page.text)

    def test_garbled_ref_sets_danger_toast(self):
        self.login()
        self.seed("faq.json", [{"question": "a", "answer": "1"}])
        r = self.client.post("/faq/delete", data={"idx": "²"}, follow_redirects=False)
        self.assertEqual(r.status_code, 302)
        self.assertEqual(r.headers["location"], "/faq")
        self.assertEqual(self.raw("faq.json"), [{"question": "a", "answer": "1"}])
        self.assertIn("Data tidak ditemukan", self.client.get("/faq").text)

    def test_malformed_file_reported(self):
        self.login()
        (self.data_dir / "promo.json").write_text("{oops", encoding="utf-8")
        page = self.client.get("/promo")
        self.assertIn("File data tidak bisa dibaca", page.text)
        self.client.post("/promo/save", data={"idx": "", "banner": "x"}, follow_redirects=False)
        self.assertEqual((self.data_dir / "promo.json").read_text(encoding="utf-8"), "{oops")
        self.assertIn("promo.json rusak", self.client.get("/promo").text)


class TestResourceRoutes(AdminRoutesTestCase):
    def setUp(self):
        super().setUp()
        self.login()

    def test_faq_save_appends_at_last_position(self):
        self.seed("faq.json", [{"question": "Lama?", "answer": "Ya"}])
        r = self.client.post(
            "/faq/save",
            data={"idx": "", "question": "Apa itu X?", "answer": "X adalah..."},
            follow_redirects=False,
        )
        self.assertEqual(r.status_code, 302)
        self.assertEqual(r.headers["location"], "/faq")
        items = self.raw("faq.json")
        self.assertEqual(len(items), 2)
        self.assertEqual((items[-1]["question"], items[-1]["answer"]), ("Apa itu X?", "X adalah..."))
        page = self.client.get("/faq")
        self.assertIn("Apa itu X?", page.text)
        self.assertLess(page.text.index("Lama?"), page.text.index("Apa itu X?"))

    def test_faq_overwrite_and_delete_by_index(self):
        self.seed("faq.json", [{"question": "a", "answer": "1"}, {"question": "b", "answer": "2"}])
        self.client.post("/faq/save", data={"idx": "0", "question": "A", "answer": "one"})
        items = self.raw("faq.json")
        self.assertEqual((items[0]["question"], items[0]["answer"]), ("A", "one"))
        self.assertEqual(items[1], {"question": "b", "answer": "2"})
        self.client.post("/faq/delete", data={"idx": "#0"})
        self.assertEqual(self.raw("faq.json"), [{"question": "b", "answer": "2"}])

    def test_produk_save_and_list(self):
        r = self.client.post(
            "/produk/save",
            data={"produk": "ShopeePay", "content": "Saldo minimal 10rb"},
            follow_redirects=False,
        )
        self.assertEqual(r.headers["location"], "/produk")
        path = self.data_dir / "produk" / "shopeepay.txt"
        self.assertEqual(path.read_text(encoding="utf-8"), "Saldo minimal 10rb")
        page = self.client.get("/produk")
        self.assertIn("shopeepay", page.text)
        self.assertIn("Saldo minimal 10rb", page.text)
        self.assertIn("Produk berhasil disimpan.", page.text)

    def test_produk_missing_fields(self):
        self.client.post("/produk/save", data={"produk": "ovo", "content": ""})
        self.assertFalse((self.data_dir / "produk" / "ovo.txt").exists())
        page = self.client.get("/produk")
        self.assertIn("Nama produk &amp; konten wajib diisi!", page.text)

    def test_produk_delete(self):
        self.client.post("/produk/save", data={"produk": "Dana", "content": "x"})
        self.client.post("/produk/delete", data={"produk": "Dana"})
        self.assertFalse((self.data_dir / "produk" / "dana.txt").exists())
        self.assertIn("Produk berhasil dihapus.", self.client.get("/produk").text)

    def test_sop_save(self):
        self.client.post("/sop/save", data={"idx": "", "trigger": "harga,price", "response": "Cek katalog"})
        item = self.raw("sop.json")[0]
        self.assertEqual(item["trigger"], ["harga", "price"])
        self.assertEqual(item["response"], ["Cek katalog"])
        self.client.post("/sop/delete", data={"idx": item["id"]})
        self.assertEqual(self.raw("sop.json"), [])

    def test_promo_active_checkbox(self):
        self.client.post("/promo/save", data={"idx": "", "banner": "On", "active": "on"})
        self.client.post("/promo/save", data={"idx": "", "banner": "Off"})
        items = self.raw("promo.json")
        self.assertEqual([(i["banner"], i["active"]) for i in items], [("On", True), ("Off", False)])
        self.client.post("/promo/delete", data={"idx": "#1"})
        self.assertEqual(len(self.raw("promo.json")), 1)

    def test_claim_resolve_persists(self):
        self.seed("log_claim.json", [{"user": "628123", "produk": "netflix"}])
        r = self.client.post("/claim/resolve", data={"idx": "0"}, follow_redirects=False)
        self.assertEqual(r.headers["location"], "/claim")
        self.assertEqual(self.raw("log_claim.json")[0]["status"], "RESOLVED")
        page = self.client.get("/claim")
        self.assertIn("Claim di-mark as resolved.", page.text)
        self.assertIn("RESOLVED", page.text)

    def test_claim_rows_with_integer_ids(self):
        self.seed("log_claim.json", [{"id": 1, "user": "a"}, {"id": 0, "user": "b"}])
        page = self.client.get("/claim")
        self.assertIn('name="idx" value="1"', page.text)
        self.assertIn('name="idx" value="0"', page.text)
        self.client.post("/claim/resolve", data={"idx": "0"})
        self.assertEqual(
            self.raw("log_claim.json"),
            [{"id": 1, "user": "a"}, {"id": 0, "user": "b", "status": "RESOLVED"}],
        )

    def test_rows_without_ids_post_hash_positions(self):
        self.seed("claimsReplace.json", [{"user": "a"}, {"user": "b"}])
        page = self.client.get("/claims-replace")
        self.assertIn('name="index" value="#1"', page.text)
        self.client.post("/claims-replace/resolve", data={"index": "#1"})
        self.assertEqual(self.raw("claimsReplace.json"), [{"user": "a"}, {"user": "b", "status": "RESOLVED"}])

    def test_produk_mixed_case_file(self):
        (self.data_dir / "produk" / "ShopeePay.txt").write_text("isi", encoding="utf-8")
        page = self.client.get("/produk")
        self.assertIn("ShopeePay", page.text)
        self.assertIn("isi", page.text)
        self.client.post("/produk/delete", data={"produk": "ShopeePay"})
        self.assertFalse((self.data_dir / "produk" / "ShopeePay.txt").exists())

    def test_blacklist_save_and_delete(self):
        self.client.post("/blacklist/save", data={"user": "628999", "reason": "spam"})
        entry = self.raw("blacklist.json")[0]
        self.assertEqual((entry["user"], entry["reason"]), ("628999", "spam"))
        self.assertTrue(entry["date"])
        self.assertIn("628999", self.client.get("/blacklist").text)
        self.client.post("/blacklist/delete", data={"idx": "#0"})
        self.assertEqual(self.raw("blacklist.json"), [])

    def test_buyers_page(self):
        self.seed("buyers.json", [{"user": "buyer-one", "data": [{}, {}, {}], "statistik": {"netflix": 3}}])
        page = self.client.get("/buyers")
        self.assertEqual(page.status_code, 200)
        self.assertIn("buyer-one", page.text)
        self.assertIn("<td>3</td>", page.text)
        self.assertIn("netflix: 3", page.text)

    def test_claims_replace_and_reset(self):
        self.seed("claimsReplace.json", [{"user": "a"}])
        self.seed("claimsReset.json", [{"user": "b"}])
        r = self.client.post("/claims-replace/resolve", data={"index": "0"}, follow_redirects=False)
        self.assertEqual(r.headers["location"], "/claims-replace")
        r = self.client.post("/claims-reset/mark", data={"index": "0"}, follow_redirects=False)
        self.assertEqual(r.headers["location"], "/claims-reset")
        self.assertEqual(self.raw("claimsReplace.json"), [{"user": "a", "status": "RESOLVED"}])
        self.assertEqual(self.raw("claimsReset.json"), [{"user": "b", "done": True}])
        self.assertIn("Reset ditandai selesai.", self.client.get("/claims-reset").text)

    def test_dashboard_counts(self):
        self.seed("promo.json", [{"banner": "a"}])
        self.seed("faq.json", [{}, {}])
        self.seed("sop.json", [{}, {}, {}])
        self.seed("log_claim.json", [{}])
        self.client.post("/produk/save", data={"produk": "ovo", "content": "x"})
        page = self.client.get("/dashboard")
        self.assertIn("<th>SOP</th><td>3</td>", page.text)
        self.assertIn("<th>Produk</th><td>1</td>", page.text)


if __name__ == "__main__":
    unittest.main()
