"""Unit tests for the JSON log formatter."""

import json
import logging
import unittest

from utils.logging import REDACTED, JSONFormatter


class TestJSONFormatter(unittest.TestCase):

    def _record(self, **extra) -> logging.LogRecord:
        record = logging.LogRecord(
            name='adapter.mongodb.user_repository',
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg='User created',
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_format_includes_standard_fields(self):
        data = json.loads(JSONFormatter().format(self._record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'adapter.mongodb.user_repository')
        self.assertEqual(data['message'], 'User created')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_format_includes_extra_fields(self):
        data = json.loads(JSONFormatter().format(self._record(userId=7)))

        self.assertEqual(data['userId'], 7)
        self.assertNotIn('msg', data)

    def test_format_redacts_credentials(self):
        record = self._record(password='hunter2', remember_hash='digest', email='a@example.com')
        data = json.loads(JSONFormatter().format(record))

        self.assertEqual(data['password'], REDACTED)
        self.assertEqual(data['remember_hash'], REDACTED)
        self.assertEqual(data['email'], 'a@example.com')


if __name__ == '__main__':
    unittest.main()
