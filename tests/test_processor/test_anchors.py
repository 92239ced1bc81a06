"""Tests for specdoc.processor.anchors."""

from __future__ import annotations

from specdoc.processor.anchors import AnchorBuilder


class TestAnchorBuilder:
    """Test anchor construction in both casing modes."""

    def test_spaces_become_hyphens(self) -> None:
        assert AnchorBuilder().build("List all pets") == "List-all-pets"

    def test_lowercased_without_url_encoding(self) -> None:
        assert AnchorBuilder(url_encode=False).build("List all pets") == "list-all-pets"

    def test_hyphen_runs_collapse_and_edges_strip(self) -> None:
        assert AnchorBuilder().build("  Create -  order  ") == "Create-order"

    def test_punctuation_preserved(self) -> None:
        assert AnchorBuilder().build("GET /users/{id}") == "GET-/users/{id}"

    def test_unicode_and_emoji_preserved(self) -> None:
        text = "Kullanıcıları getir 🚀"
        assert AnchorBuilder(url_encode=True).build(text) == "Kullanıcıları-getir-🚀"
        assert AnchorBuilder(url_encode=False).build(text) == "kullanıcıları-getir-🚀"

    def test_deterministic(self) -> None:
        builder = AnchorBuilder()
        assert builder.build("Ünïcødé Title") is builder.build("Ünïcødé Title")
        builder.clear_cache()
        assert builder.build("Ünïcødé Title") == "Ünïcødé-Title"

    def test_memo_follows_mode_change(self) -> None:
        builder = AnchorBuilder()
        assert builder.build("Hello World") == "Hello-World"
        builder.url_encode = False
        assert builder.build("Hello World") == "hello-world"
        builder.url_encode = True
        assert builder.build("Hello World") == "Hello-World"
        assert builder.cache_size == 2

    def test_for_operation_prefers_summary(self) -> None:
        builder = AnchorBuilder()
        assert builder.for_operation("get", "/pets", "List pets") == "List-pets"
        assert builder.for_operation("get", "/pets") == "GET-/pets"
