from pathlib import Path
import unittest


class SkeletonServiceWiringTests(unittest.TestCase):
    @staticmethod
    def _source(path: str) -> str:
        return Path(path).read_text(encoding="utf-8")

    def test_generate_is_wrapped_by_safe_run_and_timer(self):
        src = self._source("Service/skeleton_service.py")
        self.assertIn("@safe_run\n    @log_execution_time\n    def generate", src)
        self.assertIn("request = parse_request(RingSetRequest, outer=outer, holes=holes)", src)

    def test_raw_handle_released_when_classification_fails(self):
        src = self._source("Service/skeleton_service.py")
        self.assertIn("self._kernel.release_skeleton(result.handle)", src)
        self.assertIn("handle = KernelHandle(self._kernel, result.handle, self._logger)", src)

    def test_offset_result_released_in_finally(self):
        src = self._source("Service/skeleton_modules/offset.py")
        self.assertIn("@contextmanager", src)
        self.assertIn("finally:\n            self._kernel.release_offset(result)", src)

    def test_guard_shares_single_finalizer(self):
        src = self._source("Service/skeleton_modules/resource.py")
        self.assertIn("weakref.finalize(self, _release, kernel, raw, logger)", src)
        self.assertIn("self._finalizer()", src)

    def test_container_builds_kernel_from_config(self):
        src = self._source("Service/container.py")
        self.assertIn("tolerance=skeleton_config.kernel_tolerance", src)
        self.assertIn("mitre_limit=skeleton_config.offset_mitre_limit", src)


if __name__ == "__main__":
    unittest.main()
