"""Tests for the glob pattern compiler."""

from __future__ import annotations

import pytest

from reslocator.errors import GlobSyntaxError
from reslocator.pattern import GroupState, compile_glob, glob_to_regex


def test_literal_pattern_matches_only_itself():
    matcher = compile_glob("books/a_game_of_thrones.properties")
    assert matcher("books/a_game_of_thrones.properties")
    assert not matcher("books/a_game_of_thronesXproperties")
    assert not matcher("books/a_game_of_thrones.properties.bak")
    assert not matcher("x/books/a_game_of_thrones.properties")


def test_regex_metacharacters_are_literal():
    pattern = "a.b+c^$(x)[y]|z"
    matcher = compile_glob(pattern)
    assert matcher(pattern)
    assert not matcher("aXbbc^$(x)[y]|z")


def test_matching_is_anchored():
    matcher = compile_glob("b.txt")
    assert not matcher("ab.txt")
    assert not matcher("b.txt2")


def test_single_star_stays_within_segment():
    matcher = compile_glob("a/*.txt")
    assert matcher("a/b.txt")
    assert matcher("a/.txt")
    assert not matcher("a/b/c.txt")


def test_double_star_crosses_segments():
    matcher = compile_glob("a/**.txt")
    assert matcher("a/b.txt")
    assert matcher("a/b/c.txt")
    assert not matcher("b/c.txt")


def test_double_star_at_end_of_pattern():
    matcher = compile_glob("a/**")
    assert matcher("a/b")
    assert matcher("a/b/c/d")
    assert glob_to_regex("a/**") == "a/.*"


def test_triple_star_is_double_then_single():
    assert glob_to_regex("***") == ".*[^/]*"


def test_question_mark_matches_one_non_separator():
    matcher = compile_glob("a?c")
    assert matcher("abc")
    assert not matcher("ac")
    assert not matcher("abbc")
    assert not matcher("a/c")


def test_brace_group_alternation():
    matcher = compile_glob("r.{txt,md}")
    assert matcher("r.txt")
    assert matcher("r.md")
    assert not matcher("r.rst")
    assert not matcher("r.txtmd")
    assert not matcher("r.")


def test_brace_group_with_empty_alternative():
    matcher = compile_glob("file{,.bak}")
    assert matcher("file")
    assert matcher("file.bak")


def test_wildcards_inside_group_alternatives():
    matcher = compile_glob("{*.txt,docs/**}")
    assert matcher("a.txt")
    assert not matcher("x/a.txt")
    assert matcher("docs/x/y.md")


def test_comma_outside_group_is_literal():
    matcher = compile_glob("a,b")
    assert matcher("a,b")
    assert not matcher("a")


def test_stray_closing_brace_is_literal():
    matcher = compile_glob("a}b")
    assert matcher("a}b")


def test_escapes():
    assert compile_glob(r"\*.txt")("*.txt")
    assert not compile_glob(r"\*.txt")("a.txt")
    assert compile_glob(r"\{a,b\}")("{a,b}")
    assert compile_glob(r"a\\b")("a\\b")
    assert compile_glob(r"\q")("q")


def test_escaped_comma_inside_group():
    matcher = compile_glob(r"{a\,b,c}")
    assert matcher("a,b")
    assert matcher("c")
    assert not matcher("a")


def test_empty_pattern_matches_empty_name_only():
    matcher = compile_glob("")
    assert matcher("")
    assert not matcher("a")


def test_trailing_backslash_is_error():
    with pytest.raises(GlobSyntaxError) as exc:
        compile_glob("abc\\")
    assert exc.value.index == 3
    assert exc.value.pattern == "abc\\"
    assert exc.value.msg == "No character to escape"


def test_nested_group_is_error_at_inner_brace():
    with pytest.raises(GlobSyntaxError) as exc:
        compile_glob("x{a,{b}}")
    assert exc.value.index == 4
    assert exc.value.msg == "Cannot nest groups"


def test_unterminated_group_is_error_at_end():
    with pytest.raises(GlobSyntaxError) as exc:
        compile_glob("*.{txt,md")
    assert exc.value.index == len("*.{txt,md") - 1
    assert exc.value.msg == "Missing closing brace"


def test_syntax_error_is_value_error():
    with pytest.raises(ValueError):
        compile_glob("{")


def test_error_index_refers_to_original_pattern():
    # Escapes expand in the regex; the index must not.
    with pytest.raises(GlobSyntaxError) as exc:
        compile_glob("..((..{a,{")
    assert exc.value.index == 9


def test_matcher_is_reusable():
    matcher = compile_glob("**.md")
    names = ["a.md", "b/c.md", "d.txt"] * 3
    assert [matcher(n) for n in names] == [True, True, False] * 3
    assert matcher.pattern == "**.md"


def test_group_states():
    assert {s.value for s in GroupState} == {"outside", "inside"}
