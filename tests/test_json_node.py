import unittest

from catalog_core.json_node import JsonNode, is_valid_url


class JsonNodeAccessTests(unittest.TestCase):
    def test_get_follows_objects_and_arrays(self) -> None:
        node = JsonNode({"a": [{"b": "deep"}]})
        self.assertEqual(node.get("a", 0, "b").string, "deep")
        self.assertEqual(node["a"][0]["b"].string, "deep")

    def test_missing_steps_yield_empty_node(self) -> None:
        node = JsonNode({"a": [1]})
        for path in (("missing",), ("a", 5), ("a", "key"), ("a", 0, "x")):
            with self.subTest(path=path):
                missing = node.get(*path)
                self.assertFalse(missing.exists)
                self.assertIsNone(missing.string)
                self.assertEqual(missing.int_value, 0)

    def test_is_empty_only_false_for_populated_containers(self) -> None:
        self.assertTrue(JsonNode(None).is_empty)
        self.assertTrue(JsonNode({}).is_empty)
        self.assertTrue(JsonNode([]).is_empty)
        self.assertTrue(JsonNode("text").is_empty)
        self.assertFalse(JsonNode({"id": 1}).is_empty)
        self.assertFalse(JsonNode([0]).is_empty)


class JsonNodeReaderTests(unittest.TestCase):
    def test_optional_readers_reject_other_types(self) -> None:
        self.assertIsNone(JsonNode("12").integer)
        self.assertIsNone(JsonNode(True).integer)
        self.assertIsNone(JsonNode(True).number)
        self.assertIsNone(JsonNode(1).boolean)
        self.assertIsNone(JsonNode(3).string)
        self.assertIsNone(JsonNode({"a": 1}).array)
        self.assertEqual(JsonNode(4.0).integer, 4)
        self.assertIsNone(JsonNode(4.5).integer)
        self.assertEqual(JsonNode(3).number, 3.0)

    def test_int_value_defaults(self) -> None:
        for raw, expected in [(7, 7), (7.9, 7), ("12", 12), ("3.5", 3), (True, 1), ("abc", 0), (None, 0), ([], 0)]:
            with self.subTest(raw=raw):
                self.assertEqual(JsonNode(raw).int_value, expected)

    def test_string_value_defaults(self) -> None:
        self.assertEqual(JsonNode("x").string_value, "x")
        self.assertEqual(JsonNode(5).string_value, "5")
        self.assertEqual(JsonNode(False).string_value, "false")
        self.assertEqual(JsonNode({"a": 1}).string_value, "")

    def test_bool_value_defaults(self) -> None:
        for raw, expected in [(True, True), (1, True), (0, False), ("YES", True), ("true", True), ("no", False), (None, False)]:
            with self.subTest(raw=raw):
                self.assertEqual(JsonNode(raw).bool_value, expected)

    def test_url_reader_requires_absolute_url(self) -> None:
        self.assertEqual(JsonNode("https://cdn.example.com/a.png").url, "https://cdn.example.com/a.png")
        self.assertIsNone(JsonNode("not a url").url)
        self.assertIsNone(JsonNode("").url)
        self.assertIsNone(JsonNode(42).url)
        self.assertFalse(is_valid_url("/relative/path.png"))


if __name__ == "__main__":
    unittest.main()
