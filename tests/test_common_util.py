import unittest

from octopus_build_info.util.common_util import normalize_version, sanitize_package_id, split_package_ids


class TestCommonUtil(unittest.TestCase):
    def test_normalize_tag_ref(self):
        self.assertEqual(normalize_version("refs/tags/v2.0.0", "v"), "2.0.0")

    def test_normalize_padded_version(self):
        self.assertEqual(normalize_version(" v2.0.0 ", "v"), "2.0.0")

    def test_normalize_bare_version(self):
        self.assertEqual(normalize_version("2.0.0", "v"), "2.0.0")
        self.assertEqual(normalize_version("refs/tags/2.0.0", "v"), "2.0.0")

    def test_normalize_only_strips_leading_prefix(self):
        self.assertEqual(normalize_version("2.0.0-rev", "rev"), "2.0.0-rev")
        self.assertEqual(normalize_version("release-1.4", "release-"), "1.4")

    def test_normalize_missing_version(self):
        self.assertIsNone(normalize_version(None, "v"))
        self.assertEqual(normalize_version("   ", "v"), "")

    def test_sanitize_package_id(self):
        self.assertEqual(sanitize_package_id("My/Package@1"), "My_Package_1")
        self.assertEqual(sanitize_package_id("Billing.Api-2_x"), "Billing.Api-2_x")
        self.assertEqual(sanitize_package_id("a b:c"), "a_b_c")

    def test_split_package_ids(self):
        self.assertEqual(split_package_ids("Billing.Api  Billing.Worker\nBilling.Api"),
                         ("Billing.Api", "Billing.Worker"))
        self.assertEqual(split_package_ids(""), ())
        self.assertEqual(split_package_ids(None), ())


if __name__ == "__main__":
    unittest.main()
