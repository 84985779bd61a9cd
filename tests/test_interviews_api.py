import unittest

from interviewiq.models.interview import new_session_id
from tests.support import ApiTestCase


class TestInterviewCrud(ApiTestCase):
    def test_create_then_fetch_round_trip(self):
        created = self.create_interview(role="Backend Developer", difficulty="medium")

        fetched = self.fetch_interview(created["id"])
        self.assertEqual(fetched["role"], "Backend Developer")
        self.assertEqual(fetched["difficulty"], "medium")
        self.assertEqual(fetched["question"], "")
        self.assertEqual(fetched["userAnswer"], "")
        self.assertEqual(fetched["audioUrl"], "")
        self.assertIsNone(fetched["feedback"])
        self.assertEqual(fetched["ownerId"], self.user_id)
        self.assertEqual(fetched["status"], "not_started")

    def test_create_response_envelope(self):
        res = self.client.post(
            "/interviews", json={"role": "  Data Engineer  ", "difficulty": "hard"}, headers=self.headers()
        )
        self.assertEqual(res.status_code, 201)
        body = res.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["message"], "Interview session created")
        self.assertNotIn("count", body)
        self.assertEqual(body["data"]["role"], "Data Engineer")

    def test_owner_comes_from_caller_not_body(self):
        created = self.create_interview(ownerId=self.other_user_id, userId=self.other_user_id)
        self.assertEqual(created["ownerId"], self.user_id)

    def test_create_requires_role_and_difficulty(self):
        res = self.client.post("/interviews", json={"role": "QA Engineer"}, headers=self.headers())
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json(), {"success": False, "message": "Please provide role and difficulty"})

    def test_unknown_difficulty_is_rejected_and_not_stored(self):
        res = self.client.post(
            "/interviews", json={"role": "QA Engineer", "difficulty": "expert"}, headers=self.headers()
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Difficulty must be easy, medium, or hard")

        listing = self.client.get("/interviews", headers=self.headers()).json()
        self.assertEqual(listing["count"], 0)

    def test_role_length_limit(self):
        res = self.client.post("/interviews", json={"role": "x" * 201, "difficulty": "easy"}, headers=self.headers())
        self.assertEqual(res.status_code, 400)
        self.assertIn("200", res.json()["message"])

        self.create_interview(role="x" * 200, difficulty="easy")

    def test_malformed_body_is_a_400_envelope(self):
        res = self.client.post("/interviews", json={"role": ["not", "text"], "difficulty": "easy"}, headers=self.headers())
        self.assertEqual(res.status_code, 400)
        self.assertFalse(res.json()["success"])

    def test_list_is_newest_first_and_scoped_to_caller(self):
        first = self.create_interview(role="First")
        second = self.create_interview(role="Second")
        self.create_interview(token=self.other_token, role="Not mine")

        res = self.client.get("/interviews", headers=self.headers())
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["count"], 2)
        self.assertEqual([i["id"] for i in body["data"]], [second["id"], first["id"]])

    def test_update_applies_only_whitelisted_fields(self):
        created = self.create_interview()

        res = self.client.put(
            f"/interviews/{created['id']}",
            json={
                "question": "How would you shard a users table?",
                "difficulty": "hard",
                "ownerId": self.other_user_id,
                "id": "hijacked",
                "isAdmin": True,
            },
            headers=self.headers(),
        )
        self.assertEqual(res.status_code, 200, res.text)
        body = res.json()
        self.assertEqual(body["message"], "Interview session updated")

        updated = body["data"]
        self.assertEqual(updated["id"], created["id"])
        self.assertEqual(updated["ownerId"], self.user_id)
        self.assertEqual(updated["difficulty"], "hard")
        self.assertEqual(updated["question"], "How would you shard a users table?")
        self.assertEqual(updated["role"], created["role"])
        self.assertEqual(updated["status"], "in_progress")
        self.assertNotIn("isAdmin", updated)

    def test_update_revalidates_difficulty(self):
        created = self.create_interview(difficulty="easy")

        res = self.client.put(f"/interviews/{created['id']}", json={"difficulty": "impossible"}, headers=self.headers())
        self.assertEqual(res.status_code, 400)
        self.assertEqual(self.fetch_interview(created["id"])["difficulty"], "easy")

    def test_update_revalidates_role(self):
        created = self.create_interview(role="Site Reliability Engineer")
        path = f"/interviews/{created['id']}"

        res = self.client.put(path, json={"role": "x" * 201}, headers=self.headers())
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Role cannot exceed 200 characters")

        res = self.client.put(path, json={"role": "   "}, headers=self.headers())
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "Role is required")

        self.assertEqual(self.fetch_interview(created["id"])["role"], "Site Reliability Engineer")

        res = self.client.put(path, json={"role": "  Platform Engineer "}, headers=self.headers())
        self.assertEqual(res.json()["data"]["role"], "Platform Engineer")

    def test_sessions_created_back_to_back_list_in_creation_order(self):
        ids = [self.create_interview(role=f"Role {n}")["id"] for n in range(5)]

        listing = self.client.get("/interviews", headers=self.headers()).json()["data"]
        self.assertEqual([i["id"] for i in listing], list(reversed(ids)))

    def test_update_with_legacy_text_feedback(self):
        created = self.create_interview()

        res = self.client.put(
            f"/interviews/{created['id']}", json={"feedback": "Solid answer overall."}, headers=self.headers()
        )
        self.assertEqual(res.status_code, 200)
        feedback = res.json()["data"]["feedback"]
        self.assertEqual(feedback["overall"], "Solid answer overall.")
        self.assertEqual(feedback["spoken"], "")
        self.assertEqual(feedback["strengths"], "")
        self.assertEqual(res.json()["data"]["status"], "completed")

    def test_update_with_structured_feedback_and_clear(self):
        created = self.create_interview()
        record = {
            "spoken": "Nice work.",
            "strengths": "Clear structure",
            "improvements": "Add metrics",
            "suggestion": "Use STAR",
            "overall": "Good",
        }

        res = self.client.put(f"/interviews/{created['id']}", json={"feedback": record}, headers=self.headers())
        self.assertEqual(res.json()["data"]["feedback"], record)

        res = self.client.put(f"/interviews/{created['id']}", json={"feedback": None}, headers=self.headers())
        self.assertIsNone(res.json()["data"]["feedback"])

    def test_non_owner_is_refused_distinctly_from_missing(self):
        created = self.create_interview()
        path = f"/interviews/{created['id']}"
        other = self.headers(self.other_token)

        res = self.client.get(path, headers=other)
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.json()["message"], "Not authorized to access this interview session")

        res = self.client.put(path, json={"question": "stolen"}, headers=other)
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.json()["message"], "Not authorized to update this interview session")

        res = self.client.delete(path, headers=other)
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.json()["message"], "Not authorized to delete this interview session")

        # untouched
        self.assertEqual(self.fetch_interview(created["id"])["question"], "")

        for method in ("get", "put", "delete"):
            kwargs = {"json": {"question": "x"}} if method == "put" else {}
            res = getattr(self.client, method)("/interviews/doesnotexist", headers=self.headers(), **kwargs)
            self.assertEqual(res.status_code, 404, method)
            self.assertEqual(res.json()["message"], "Interview session not found")

    def test_delete_twice(self):
        created = self.create_interview()
        path = f"/interviews/{created['id']}"

        res = self.client.delete(path, headers=self.headers())
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json(), {"success": True, "message": "Interview session deleted", "data": {}})

        res = self.client.delete(path, headers=self.headers())
        self.assertEqual(res.status_code, 404)


class TestAuthentication(ApiTestCase):
    def test_routes_require_a_token(self):
        for method, path in (
            ("get", "/interviews"),
            ("post", "/interviews"),
            ("get", "/interviews/abc"),
            ("post", "/ai/generate-question"),
            ("post", "/ai/analyze-answer"),
            ("post", "/ai/generate-audio"),
        ):
            res = getattr(self.client, method)(path)
            self.assertEqual(res.status_code, 401, path)
            self.assertFalse(res.json()["success"])

    def test_unknown_token_is_rejected(self):
        res = self.client.get("/interviews", headers=self.headers("0" * 64))
        self.assertEqual(res.status_code, 401)

    def test_login_with_wrong_password(self):
        res = self.client.post("/auth/login", json={"email": "owner@example.com", "password": "wrong-password"})
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json()["message"], "Invalid credentials")

    def test_duplicate_registration(self):
        res = self.client.post("/auth/register", json={"email": "Owner@Example.com", "password": "secret123"})
        self.assertEqual(res.status_code, 409)

    def test_me(self):
        res = self.client.get("/auth/me", headers=self.headers())
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["data"]["email"], "owner@example.com")

    def test_request_id_is_echoed(self):
        res = self.client.get("/health", headers={"X-Request-ID": "req-123"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.headers["X-Request-ID"], "req-123")
        self.assertTrue(self.client.get("/health/db").json()["ok"])


class TestSessionIds(unittest.TestCase):
    def test_ids_sort_in_creation_order(self):
        ids = [new_session_id() for _ in range(1000)]
        self.assertEqual(ids, sorted(ids))
        self.assertEqual(len(set(ids)), len(ids))
        self.assertTrue(all(len(i) == 32 for i in ids))


if __name__ == "__main__":
    unittest.main()
