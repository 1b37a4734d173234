#!/usr/bin/env python3
"""CredGate ignore 설정 제안 / 체크섬 - 단위 테스트"""
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import yaml

sys.path.insert(0, os.path.dirname(__file__))
from checksum import calculate_collective_hash
from ignore_suggestion import (
    FileIgnoreConfig, SuggestionError, CredGateError,
    build_ignore_configs, suggest_ignore_config
)


class TestFileIgnoreConfig(unittest.TestCase):
    def test_to_dict_field_order(self):
        d = FileIgnoreConfig('a.txt', 'deadbeef').to_dict()
        self.assertEqual(list(d), ['filename', 'checksum', 'allowed_patterns'])
        self.assertEqual(d['allowed_patterns'], [])


class TestSuggestIgnoreConfig(unittest.TestCase):
    def test_checksum_called_per_path(self):
        calls = []

        def checksum(paths):
            calls.append(list(paths))
            return 'sum-' + paths[0]

        configs = build_ignore_configs(['a.txt', 'b.txt'], checksum)
        self.assertEqual(calls, [['a.txt'], ['b.txt']])
        self.assertEqual([c.checksum for c in configs], ['sum-a.txt', 'sum-b.txt'])

    def test_yaml_format(self):
        text = suggest_ignore_config(['secrets.txt'], lambda paths: 'deadbeef')
        self.assertEqual(text, (
            "fileignoreconfig:\n"
            "- filename: secrets.txt\n"
            "  checksum: deadbeef\n"
            "  allowed_patterns: []\n"
        ))

    def test_yaml_round_trip(self):
        text = suggest_ignore_config(['a.txt', 'dir/b.yml'], lambda paths: 'x' + paths[0])
        loaded = yaml.safe_load(text)
        self.assertEqual(loaded, {'fileignoreconfig': [
            {'filename': 'a.txt', 'checksum': 'xa.txt', 'allowed_patterns': []},
            {'filename': 'dir/b.yml', 'checksum': 'xdir/b.yml', 'allowed_patterns': []},
        ]})

    def test_serialization_error_is_raised(self):
        with mock.patch('ignore_suggestion.yaml.safe_dump', side_effect=yaml.YAMLError('boom')):
            with self.assertRaises(SuggestionError) as ctx:
                suggest_ignore_config(['a.txt'], lambda paths: 'x')
        self.assertIsInstance(ctx.exception, CredGateError)
        self.assertIsInstance(ctx.exception.__cause__, yaml.YAMLError)

    def test_checksum_error_propagates(self):
        def broken(paths):
            raise OSError('disk gone')

        with self.assertRaises(OSError):
            suggest_ignore_config(['a.txt'], broken)


class TestCollectiveHash(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = self.tmpdir.name
        Path(self.root, 'a.txt').write_text('AWS_KEY = "secret"\n')
        Path(self.root, 'b.txt').write_text('AWS_KEY = "secret"\n')

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_stable_for_same_content(self):
        first = calculate_collective_hash(['a.txt'], root=self.root)
        second = calculate_collective_hash(['a.txt'], root=self.root)
        self.assertEqual(first, second)
        self.assertEqual(len(first), 64)

    def test_changes_with_content(self):
        before = calculate_collective_hash(['a.txt'], root=self.root)
        Path(self.root, 'a.txt').write_text('AWS_KEY = "rotated"\n')
        self.assertNotEqual(before, calculate_collective_hash(['a.txt'], root=self.root))

    def test_path_is_part_of_hash(self):
        # 같은 내용이라도 경로가 다르면 다른 체크섬
        self.assertNotEqual(
            calculate_collective_hash(['a.txt'], root=self.root),
            calculate_collective_hash(['b.txt'], root=self.root),
        )

    def test_order_matters(self):
        self.assertNotEqual(
            calculate_collective_hash(['a.txt', 'b.txt'], root=self.root),
            calculate_collective_hash(['b.txt', 'a.txt'], root=self.root),
        )

    def test_missing_file_does_not_raise(self):
        with self.assertLogs('credgate', level='WARNING'):
            digest = calculate_collective_hash(['missing.txt'], root=self.root)
        self.assertEqual(len(digest), 64)


if __name__ == '__main__':
    unittest.main()
