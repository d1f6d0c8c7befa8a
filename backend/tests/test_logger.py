import logging
import os
import tempfile
import unittest
from unittest.mock import patch

from core.logger import setup_logger


class SetupLoggerTests(unittest.TestCase):
    def tearDown(self):
        for name in ('science_fair_test_file', 'science_fair_test_console'):
            test_logger = logging.getLogger(name)
            for handler in list(test_logger.handlers):
                handler.close()
                test_logger.removeHandler(handler)

    def test_writes_rotating_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            test_logger = setup_logger('science_fair_test_file', 'debug', log_dir=tmp)
            test_logger.info('Registration successful: project 100')
            for handler in test_logger.handlers:
                handler.flush()

            with open(os.path.join(tmp, 'app.log'), encoding='utf-8') as f:
                self.assertIn('project 100', f.read())
            self.assertEqual(test_logger.level, logging.DEBUG)
            self.tearDown()

    def test_console_only(self):
        with patch.dict(os.environ, {'LOG_TO_FILE': 'false'}):
            test_logger = setup_logger('science_fair_test_console')

        self.assertEqual(len(test_logger.handlers), 1)
        self.assertIs(setup_logger('science_fair_test_console'), test_logger)


if __name__ == '__main__':
    unittest.main()
