import copy

import pytest

from json_tree_editor.models.document import MISSING
from json_tree_editor.models.errors import ValidationException
from json_tree_editor.services.path_navigator import (
    delete_at_path,
    format_path,
    get_at_path,
    path_starts_with,
    set_at_path,
    split_path,
)


class TestGetAtPath:

    def test_empty_path_returns_document(self, sample_document):
        assert get_at_path(sample_document, []) is sample_document

    def test_nested_value(self, sample_document):
        assert get_at_path(sample_document, ["user", "settings", "theme"]) == "dark"

    def test_falsy_value_is_found(self, sample_document):
        assert get_at_path(sample_document, ["count"]) == 0

    def test_missing_key(self, sample_document):
        assert get_at_path(sample_document, ["user", "email"]) is MISSING

    def test_through_scalar(self, sample_document):
        assert get_at_path(sample_document, ["user", "name", "first"]) is MISSING

    def test_through_array(self, sample_document):
        assert get_at_path(sample_document, ["tags", "0"]) is MISSING

    def test_non_string_segment(self, sample_document):
        with pytest.raises(ValidationException) as exc_info:
            get_at_path(sample_document, ["tags", 0])
        assert exc_info.value.error_code == "INVALID_PATH"

    def test_path_longer_than_limit_is_missing(self, sample_document):
        assert get_at_path(sample_document, ["user", "name"], max_depth=1) is MISSING
        assert get_at_path(sample_document, ["a"] * 101) is MISSING


class TestSetAtPath:

    def test_get_after_set(self, sample_document):
        path = ["user", "settings", "theme"]
        result = set_at_path(sample_document, path, {"mode": "light"})
        assert get_at_path(result, path) == {"mode": "light"}

    def test_input_not_mutated(self, sample_document):
        original = copy.deepcopy(sample_document)
        set_at_path(sample_document, ["user", "name"], "Bob")
        assert sample_document == original

    def test_copies_path_and_shares_siblings(self, sample_document):
        result = set_at_path(sample_document, ["user", "settings", "theme"], "light")
        assert result is not sample_document
        assert result["user"] is not sample_document["user"]
        assert result["user"]["settings"] is not sample_document["user"]["settings"]
        assert result["tags"] is sample_document["tags"]

    def test_creates_missing_intermediates(self):
        result = set_at_path({}, ["a", "b", "c"], 1)
        assert result == {"a": {"b": {"c": 1}}}

    def test_replaces_scalar_intermediate(self):
        result = set_at_path({"a": 5}, ["a", "b"], 1)
        assert result == {"a": {"b": 1}}

    def test_empty_path_replaces_document(self, sample_document):
        replacement = {"fresh": True}
        assert set_at_path(sample_document, [], replacement) == replacement

    @pytest.mark.parametrize("value", [[1, 2], "text", 3, None])
    def test_empty_path_requires_object(self, sample_document, value):
        with pytest.raises(ValidationException):
            set_at_path(sample_document, [], value)

    def test_path_depth_limit(self, sample_document):
        with pytest.raises(ValidationException) as exc_info:
            set_at_path(sample_document, ["a"] * 5, 1, max_depth=3)
        assert exc_info.value.error_code == "PATH_TOO_DEEP"

    def test_deep_path_without_limit(self):
        path = [f"k{i}" for i in range(5000)]
        result = set_at_path({}, path, "leaf", max_depth=None)
        assert get_at_path(result, path, max_depth=None) == "leaf"


class TestDeleteAtPath:

    def test_removes_only_addressed_key(self, sample_document):
        result = delete_at_path(sample_document, ["user", "settings", "theme"])
        assert result["user"]["settings"] == {"notifications": True}
        assert result["user"]["name"] == sample_document["user"]["name"]
        assert result["tags"] == sample_document["tags"]

    def test_input_not_mutated(self, sample_document):
        original = copy.deepcopy(sample_document)
        delete_at_path(sample_document, ["user"])
        assert sample_document == original

    def test_delete_after_set(self, sample_document):
        path = ["user", "settings", "extra"]
        result = delete_at_path(set_at_path(sample_document, path, 42), path)
        assert result == sample_document

    def test_missing_key_is_noop_copy(self, sample_document):
        result = delete_at_path(sample_document, ["user", "nope"])
        assert result == sample_document
        assert result is not sample_document

    def test_path_depth_limit(self, sample_document):
        with pytest.raises(ValidationException) as exc_info:
            delete_at_path(sample_document, ["a"] * 5, max_depth=3)
        assert exc_info.value.error_code == "PATH_TOO_DEEP"

    def test_empty_path_rejected(self, sample_document):
        with pytest.raises(ValidationException) as exc_info:
            delete_at_path(sample_document, [])
        assert exc_info.value.error_code == "EMPTY_PATH"

    def test_missing_parent_rejected(self, sample_document):
        with pytest.raises(ValidationException) as exc_info:
            delete_at_path(sample_document, ["nope", "key"])
        assert exc_info.value.error_code == "PARENT_NOT_FOUND"


class TestPathHelpers:

    @pytest.mark.parametrize("path, prefix, expected", [
        (["a", "b"], ["a"], True),
        (["a"], ["a"], True),
        (["a"], [], True),
        (["ab"], ["a"], False),
        (["a"], ["a", "b"], False),
        (["b", "a"], ["a"], False),
    ])
    def test_path_starts_with(self, path, prefix, expected):
        assert path_starts_with(path, prefix) is expected

    def test_format_path(self):
        assert format_path([]) == "<root>"
        assert format_path(["a", "b"]) == "a -> b"

    def test_split_path(self):
        assert split_path(["a", "b", "c"]) == (["a", "b"], "c")
