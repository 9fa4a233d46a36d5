#!/usr/bin/env python3
"""
Unit tests for employee code sequencing.
"""

import unittest

import pytest

from core.errors import EmployeeCodeExhausted, SequencingConflict
from core.profiles.employee_code import EmployeeCodeSequencer, next_code


class TestNextCode(unittest.TestCase):

    def test_first_code(self):
        self.assertEqual(next_code([]), "GS000001")

    def test_follows_highest_code(self):
        self.assertEqual(next_code(["GS000001", "GS000042"]), "GS000043")

    def test_unordered_input(self):
        self.assertEqual(next_code(["GS000042", "GS000007", "GS000001"]), "GS000043")

    def test_trailing_newline_is_malformed(self):
        self.assertEqual(next_code(["GS000009\n", "GS000002"]), "GS000003")

    def test_malformed_codes_are_ignored(self):
        self.assertEqual(next_code(["GS00abc"]), "GS000001")
        self.assertEqual(next_code(["GS000005", "GS9999999", "XX000900", None, ""]), "GS000006")

    def test_exhausted_sequence(self):
        with self.assertRaises(EmployeeCodeExhausted) as ctx:
            next_code(["GS999999"])
        self.assertIsInstance(ctx.exception, SequencingConflict)

    def test_custom_prefix_and_width(self):
        sequencer = EmployeeCodeSequencer(prefix="EMP", width=4)
        self.assertEqual(sequencer.next_code(["EMP0009", "GS000100"]), "EMP0010")


class TestEmployeeCodeSequencer(unittest.TestCase):

    def setUp(self):
        self.sequencer = EmployeeCodeSequencer()

    def test_malformed_lists_bad_codes(self):
        self.assertEqual(
            self.sequencer.malformed(["GS000001", "GS12", "gs000002", None]),
            ["GS12", "gs000002"]
        )

    def test_invalid_width(self):
        with self.assertRaises(ValueError):
            EmployeeCodeSequencer(width=0)


@pytest.mark.parametrize("code,valid", [
    ("GS000001", True),
    ("GS999999", True),
    ("GS00001", False),
    ("GS0000001", False),
    ("GS00000A", False),
    (" GS000001", False),
    ("GS000001\n", False),
    (None, False),
])
def test_is_valid(code, valid):
    assert EmployeeCodeSequencer().is_valid(code) is valid
