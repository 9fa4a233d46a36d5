#!/usr/bin/env python3
"""
Unit tests for the candidate retriever.
"""

import logging
import unittest

from core.errors import NotFound, RetrievalError
from core.matching.filters import FilterRule, Placement, Predicate, RuleKind
from core.matching.retriever import CandidateRetriever
from tests.mocks.store_mocks import FailingCandidateStore, InMemoryCandidateStore, make_candidate


class TestCandidateRetriever(unittest.TestCase):

    def setUp(self):
        self.candidates = [make_candidate(f"c{i}", city="Toronto" if i % 2 else "Ottawa") for i in range(6)]
        self.store = InMemoryCandidateStore(self.candidates)
        self.retriever = CandidateRetriever(self.store)

    def test_fetch_applies_storage_predicate(self):
        predicate = Predicate((
            FilterRule("cityFilter", RuleKind.SUBSTRING, ("city",), "tor", Placement.STORAGE),
        ))
        result = self.retriever.fetch("pos-1", predicate, cap=100)
        self.assertEqual([c.id for c in result], ["c1", "c3", "c5"])
        self.assertEqual(self.store.fetch_calls[0]["cap"], 100)

    def test_unknown_position_raises_not_found(self):
        with self.assertRaises(NotFound):
            self.retriever.fetch("missing", Predicate(), cap=10)
        with self.assertRaises(NotFound):
            self.retriever.count("missing")
        self.assertEqual(self.store.fetch_calls, [])

    def test_fetch_at_cap_logs_warning(self):
        with self.assertLogs("core.matching.retriever", level=logging.WARNING) as logs:
            result = self.retriever.fetch("pos-1", Predicate(), cap=6)
        self.assertEqual(len(result), 6)
        self.assertIn("hit the cap of 6", logs.output[0])

    def test_fetch_under_cap_does_not_warn(self):
        with self.assertNoLogs("core.matching.retriever", level=logging.WARNING):
            self.retriever.fetch("pos-1", Predicate(), cap=7)

    def test_invalid_cap_raises(self):
        with self.assertRaises(ValueError):
            self.retriever.fetch("pos-1", Predicate(), cap=0)

    def test_storage_fault_becomes_retrieval_error(self):
        retriever = CandidateRetriever(FailingCandidateStore(ConnectionError("connection reset")))
        retriever.store.positions = {"pos-1"}

        with self.assertRaises(RetrievalError) as ctx:
            retriever.fetch("pos-1", Predicate(), cap=10)

        self.assertTrue(ctx.exception.retryable)
        self.assertIn("connection reset", ctx.exception.details)
        self.assertIn("fetch_candidates", ctx.exception.details)

    def test_count_is_unfiltered(self):
        self.assertEqual(self.retriever.count("pos-1"), 6)

    def test_fetch_can_skip_position_check(self):
        result = self.retriever.fetch("pos-1", Predicate(), cap=10, check_position=False)
        self.assertEqual(len(result), 6)
        self.assertEqual(self.store.position_checks, 0)
