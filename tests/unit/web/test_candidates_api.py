#!/usr/bin/env python3
"""
Unit tests for the position candidates endpoint.
Tests GET /api/jobseekers/position-candidates/{position_id} over an in-memory store.
"""

import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from core.matching.models import STATUS_ASSIGNED, STATUS_UNAVAILABLE
from tests.mocks.store_mocks import FailingCandidateStore, InMemoryCandidateStore, make_candidate
from web.backend.app import app
from web.backend.config import AppConfig
from web.backend.dependencies import get_app_config, get_db

URL = "/api/jobseekers/position-candidates/pos-1"


class TestPositionCandidatesEndpoint(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryCandidateStore([
            make_candidate("a", score=0.9, first_name="Ana", last_name="Silva", bio="Forklift certified"),
            make_candidate("b", score=0.9, is_available=False, status=STATUS_UNAVAILABLE),
            make_candidate("c", score=0.7, availability="Part-Time", weekend_availability=True),
            make_candidate("d", score=0.5, is_available=False, status=STATUS_UNAVAILABLE),
            make_candidate("e", score=0.2, status=STATUS_ASSIGNED, city="Hamilton"),
        ])

        app.dependency_overrides[get_db] = lambda: MagicMock()
        app.dependency_overrides[get_app_config] = lambda: AppConfig()

        self.repo_patch = patch(
            'web.backend.services.candidate_service.CandidateRepository',
            side_effect=lambda db: self.store
        )
        self.repo_patch.start()
        self.client = TestClient(app, raise_server_exceptions=False)

    def tearDown(self):
        self.repo_patch.stop()
        app.dependency_overrides.clear()

    def test_response_shape_is_camel_case(self):
        response = self.client.get(URL, params={"onlyAvailable": "true", "limit": 2})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["positionId"], "pos-1")
        self.assertEqual(
            data["pagination"],
            {
                "page": 1, "limit": 2, "total": 5, "totalFiltered": 3,
                "totalPages": 2, "hasNextPage": True, "hasPrevPage": False
            }
        )
        self.assertEqual(data["filters"], {"onlyAvailable": True})

        first = data["candidates"][0]
        self.assertEqual(first["id"], "a")
        self.assertEqual(first["name"], "Ana Silva")
        self.assertEqual(first["similarityScore"], 0.9)
        self.assertTrue(first["isAvailable"])
        self.assertEqual(first["phoneNumber"], "416-555-0100")
        self.assertIn("weekendAvailability", first)
        self.assertEqual([c["id"] for c in data["candidates"]], ["a", "c"])

    def test_default_limit_comes_from_config(self):
        app.dependency_overrides[get_app_config] = lambda: AppConfig(matching={"default_limit": 3})
        data = self.client.get(URL).json()
        self.assertEqual(data["pagination"]["limit"], 3)
        self.assertEqual(len(data["candidates"]), 3)

    def test_filters_from_query(self):
        response = self.client.get(URL, params={
            "availabilityFilter": "Part-Time",
            "weekendAvailabilityFilter": "true",
        })
        data = response.json()
        self.assertEqual([c["id"] for c in data["candidates"]], ["c"])
        self.assertEqual(data["filters"], {"availabilityFilter": "Part-Time", "weekendAvailabilityFilter": True})

    def test_all_choice_is_ignored(self):
        data = self.client.get(URL, params={"availabilityFilter": "all", "weekendAvailabilityFilter": "all"}).json()
        self.assertEqual(data["pagination"]["totalFiltered"], 5)

    def test_short_search_is_ignored(self):
        data = self.client.get(URL, params={"search": "fo"}).json()
        self.assertEqual(data["pagination"]["totalFiltered"], 5)
        data = self.client.get(URL, params={"search": "fork"}).json()
        self.assertEqual([c["id"] for c in data["candidates"]], ["a"])

    def test_status_is_reported(self):
        data = self.client.get(URL, params={"cityFilter": "Ham"}).json()
        self.assertEqual(data["candidates"][0]["status"], "assigned")

    def test_page_beyond_range(self):
        data = self.client.get(URL, params={"page": 999}).json()
        self.assertEqual(data["candidates"], [])
        self.assertFalse(data["pagination"]["hasNextPage"])
        self.assertTrue(data["pagination"]["hasPrevPage"])

    def test_non_positive_page_is_bad_request(self):
        response = self.client.get(URL, params={"page": 0})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["type"], "ValidationError")

    def test_non_numeric_limit_is_bad_request(self):
        response = self.client.get(URL, params={"limit": "ten"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["type"], "ValidationError")

    def test_unknown_availability_is_bad_request(self):
        response = self.client.get(URL, params={"availabilityFilter": "Weekends"})
        self.assertEqual(response.status_code, 400)

    def test_unknown_position_is_not_found(self):
        response = self.client.get("/api/jobseekers/position-candidates/pos-404")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["type"], "NotFound")

    def test_storage_fault_is_server_error_with_details(self):
        self.store = FailingCandidateStore(ConnectionError("connection refused"))
        response = self.client.get(URL)

        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["type"], "RetrievalError")
        self.assertTrue(body["retryable"])
        self.assertIn("connection refused", body["details"])


class TestHealth(unittest.TestCase):

    def test_health(self):
        response = TestClient(app).get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")
