#!/usr/bin/env python3
"""
Unit tests for the candidate matching pipeline end to end over an in-memory store.
"""

import unittest

from core.config_loader import MatchingConfig
from core.errors import NotFound
from core.matching.filters import FilterSpec
from core.matching.service import CandidateMatchingService
from core.matching.models import STATUS_UNAVAILABLE
from tests.mocks.store_mocks import InMemoryCandidateStore, make_candidate


class TestCandidateMatchingService(unittest.TestCase):

    def setUp(self):
        self.candidates = [
            make_candidate("a", score=0.9),
            make_candidate("b", score=0.9, is_available=False, status=STATUS_UNAVAILABLE),
            make_candidate("c", score=0.7),
            make_candidate("d", score=0.5, is_available=False, status=STATUS_UNAVAILABLE),
            make_candidate("e", score=0.2),
        ]
        self.store = InMemoryCandidateStore(self.candidates)
        self.service = CandidateMatchingService(self.store)

    def test_only_available_first_page(self):
        spec = FilterSpec.build(only_available=True, limit=2, page=1)
        page = self.service.match("pos-1", spec)

        self.assertEqual([r.candidate.id for r in page.candidates], ["a", "c"])
        self.assertEqual([r.rank for r in page.candidates], [1, 2])
        self.assertEqual(page.pagination.total, 5)
        self.assertEqual(page.pagination.total_filtered, 3)
        self.assertEqual(page.pagination.total_pages, 2)
        self.assertTrue(page.pagination.has_next_page)
        self.assertFalse(page.pagination.has_prev_page)
        self.assertEqual(page.filters, {"onlyAvailable": True})

    def test_only_available_second_page(self):
        page = self.service.match("pos-1", FilterSpec.build(only_available=True, limit=2, page=2))
        self.assertEqual([r.candidate.id for r in page.candidates], ["e"])
        self.assertEqual([r.rank for r in page.candidates], [3])
        self.assertFalse(page.pagination.has_next_page)

    def test_without_filters_ties_keep_storage_order(self):
        page = self.service.match("pos-1", FilterSpec.build(limit=10))
        self.assertEqual([r.candidate.id for r in page.candidates], ["a", "b", "c", "d", "e"])
        self.assertEqual(page.pagination.total, page.pagination.total_filtered)

    def test_short_search_is_same_as_no_search(self):
        with_short = self.service.match("pos-1", FilterSpec.build(search="ab"))
        without = self.service.match("pos-1", FilterSpec.build())
        self.assertEqual(
            [r.candidate.id for r in with_short.candidates],
            [r.candidate.id for r in without.candidates]
        )
        self.assertEqual(with_short.pagination, without.pagination)
        self.assertEqual(with_short.filters, {})

    def test_in_process_filters_shrink_total_filtered_only(self):
        page = self.service.match("pos-1", FilterSpec.build(name_filter="c Test"))
        self.assertEqual([r.candidate.id for r in page.candidates], ["c"])
        self.assertEqual(page.pagination.total, 5)
        self.assertEqual(page.pagination.total_filtered, 1)
        self.assertEqual(page.pagination.total_pages, 1)

    def test_unverified_profiles_are_never_candidates(self):
        self.store.candidates.append(make_candidate("pending", score=0.99, verification_status="pending"))
        page = self.service.match("pos-1", FilterSpec.build())
        self.assertNotIn("pending", [r.candidate.id for r in page.candidates])

    def test_filters_matching_nothing_give_empty_page(self):
        page = self.service.match("pos-1", FilterSpec.build(city_filter="Vancouver"))
        self.assertEqual(page.candidates, [])
        self.assertEqual(page.pagination.total_filtered, 0)
        self.assertEqual(page.pagination.total_pages, 0)

    def test_page_out_of_range(self):
        page = self.service.match("pos-1", FilterSpec.build(page=999))
        self.assertEqual(page.candidates, [])
        self.assertEqual(page.pagination.page, 999)
        self.assertFalse(page.pagination.has_next_page)
        self.assertTrue(page.pagination.has_prev_page)

    def test_unknown_position(self):
        with self.assertRaises(NotFound):
            self.service.match("pos-unknown", FilterSpec.build())

    def test_fetch_cap_comes_from_config(self):
        service = CandidateMatchingService(self.store, config=MatchingConfig(fetch_cap=3))
        page = service.match("pos-1", FilterSpec.build())
        self.assertEqual(self.store.fetch_calls[-1]["cap"], 3)
        self.assertTrue(page.truncated)
        self.assertEqual(page.pagination.total_filtered, 3)

    def test_position_is_checked_once_per_request(self):
        self.service.match("pos-1", FilterSpec.build(only_available=True))
        self.assertEqual(self.store.position_checks, 1)
