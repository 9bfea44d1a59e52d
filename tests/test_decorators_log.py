import os
import tempfile
import unittest

from _support import RecordingLogger

from Common.errors import InvalidArgumentError, ResourceError
from Common.log import Log
from Function.decorators import log_execution_time, safe_run


class _Worker:
    def __init__(self, logger):
        self._logger = logger

    @safe_run
    @log_execution_time
    def run(self, exc=None):
        if exc is not None:
            raise exc
        return "ok"


class DecoratorTests(unittest.TestCase):
    def test_execution_time_logged_through_instance_logger(self):
        logger = RecordingLogger()
        self.assertEqual(_Worker(logger).run(), "ok")
        self.assertTrue(any(m.startswith("▶ [시작] _Worker.run") for m in logger.messages("DEBUG")))
        self.assertTrue(any(m.startswith("◀ [완료] _Worker.run") for m in logger.messages("INFO")))

    def test_invalid_argument_logged_as_warning(self):
        logger = RecordingLogger()
        with self.assertRaises(InvalidArgumentError):
            _Worker(logger).run(InvalidArgumentError("bad"))
        self.assertEqual(logger.messages("ERROR"), [])
        self.assertTrue(logger.messages("WARNING"))

    def test_other_errors_logged_with_traceback_and_reraised(self):
        logger = RecordingLogger()
        with self.assertRaises(ResourceError):
            _Worker(logger).run(ResourceError("gone"))
        errors = logger.messages("ERROR")
        self.assertEqual(len(errors), 1)
        self.assertIn("[Traceback]", errors[0])


class LogTests(unittest.TestCase):
    def test_log_file_path_and_unknown_level(self):
        with tempfile.TemporaryDirectory() as tmp:
            log = Log(log_dir=tmp, console=False)
            self.assertTrue(os.path.basename(log.get_log_paths()).startswith("Skeleton_"))
            self.assertEqual(os.path.dirname(log.get_log_paths()), tmp)
            log.log("skeleton ready", level="info")
            log.log("ignored", level="TRACE")


if __name__ == "__main__":
    unittest.main()
