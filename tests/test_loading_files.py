"""Tests for loading.files: ini and YAML language file loaders."""

from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from textdomains.constants import NON_JOINING_BLANK
from textdomains.diagnostics import (
    DiagnosticCode,
    TranslationFileNotFoundError,
    TranslationParseError,
)
from textdomains.enums import SourceFormat
from textdomains.loading import IniFileLoader, SourceFileLoader, TextDomain, YamlFileLoader

# ============================================================================
# INI LOADER
# ============================================================================


class TestIniFileLoader:
    """Parsing of the extended ini dialect."""

    def test_plain_and_quoted_values(self, tmp_path: Path) -> None:
        """Quoted values are unquoted; plain values are stripped."""
        path = tmp_path / "en.ini"
        path.write_text('Search = "Search"\nHome =  Home  \n', encoding="utf-8")

        source = IniFileLoader().load(path)

        assert source.format is SourceFormat.INI
        assert dict(source.data) == {"Search": "Search", "Home": "Home"}
        assert source.extends == ()

    def test_comments_and_blank_lines_skipped(self, tmp_path: Path) -> None:
        """Lines starting with ; or # and empty lines are ignored."""
        path = tmp_path / "en.ini"
        path.write_text("; comment\n\n# another\nkey = value\n", encoding="utf-8")

        assert dict(IniFileLoader().load(path).data) == {"key": "value"}

    def test_quoted_blank_becomes_marker(self, tmp_path: Path) -> None:
        """An explicitly blank value becomes the non-joining marker."""
        path = tmp_path / "en.ini"
        path.write_text('foo = ""\n', encoding="utf-8")

        data = IniFileLoader().load(path).data

        assert data["foo"] == NON_JOINING_BLANK
        assert data["foo"] == "\u200c"

    def test_quoted_blank_without_conversion(self, tmp_path: Path) -> None:
        """With convert_blanks off the blank stays an empty string."""
        path = tmp_path / "en.ini"
        path.write_text('foo = ""\n', encoding="utf-8")

        data = IniFileLoader(convert_blanks=False).load(path).data

        assert data["foo"] == ""
        assert "bar" not in data

    def test_blank_distinct_from_missing(self, tmp_path: Path) -> None:
        """Blank keys are present; undefined keys are absent."""
        path = tmp_path / "en.ini"
        path.write_text('foo = ""\n', encoding="utf-8")

        data = IniFileLoader().load(path).data

        assert "foo" in data
        assert data.get("missing") is None

    def test_last_duplicate_wins(self, tmp_path: Path) -> None:
        """Within one file the last occurrence of a key wins."""
        path = tmp_path / "en.ini"
        path.write_text("k = first\nk = second\n", encoding="utf-8")

        assert IniFileLoader().load(path).data["k"] == "second"

    def test_value_may_contain_equals(self, tmp_path: Path) -> None:
        """Only the first '=' separates key from value."""
        path = tmp_path / "en.ini"
        path.write_text('formula = "a = b"\n', encoding="utf-8")

        assert IniFileLoader().load(path).data["formula"] == "a = b"

    def test_parent_directives_stripped(self, tmp_path: Path) -> None:
        """@parent_ini and @extends are reported as extends, not data."""
        path = tmp_path / "fi.ini"
        path.write_text('@parent_ini = "en.ini"\n@extends = base.ini\nk = v\n', encoding="utf-8")

        source = IniFileLoader().load(path)

        assert source.extends == ("en.ini", "base.ini")
        assert source.has_parents
        assert "@parent_ini" not in source.data
        assert "@extends" not in source.data

    def test_empty_directive_rejected(self, tmp_path: Path) -> None:
        """A parent directive must name a file."""
        path = tmp_path / "fi.ini"
        path.write_text('@parent_ini = ""\n', encoding="utf-8")

        with pytest.raises(TranslationParseError) as exc_info:
            IniFileLoader().load(path)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.INVALID_DIRECTIVE

    def test_line_without_equals_is_parse_error(self, tmp_path: Path) -> None:
        """Malformed lines fail with path and line number."""
        path = tmp_path / "en.ini"
        path.write_text("good = yes\nthis line is broken\n", encoding="utf-8")

        with pytest.raises(TranslationParseError) as exc_info:
            IniFileLoader().load(path)

        assert exc_info.value.line == 2
        assert exc_info.value.path == str(path)
        assert f"{path}:2" in str(exc_info.value)

    def test_bom_ignored(self, tmp_path: Path) -> None:
        """A UTF-8 byte order mark does not end up in the first key."""
        path = tmp_path / "en.ini"
        path.write_bytes("\ufeffSearch = Search\n".encode())

        assert list(IniFileLoader().load(path).data) == ["Search"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise TranslationFileNotFoundError naming the path."""
        path = tmp_path / "nope.ini"

        with pytest.raises(TranslationFileNotFoundError) as exc_info:
            IniFileLoader().load(path)

        assert exc_info.value.path == str(path)
        assert isinstance(exc_info.value, FileNotFoundError)

    def test_invalid_utf8_is_parse_error(self, tmp_path: Path) -> None:
        """Undecodable bytes are reported as a parse failure."""
        path = tmp_path / "en.ini"
        path.write_bytes(b"k = \xff\xfe\n")

        with pytest.raises(TranslationParseError):
            IniFileLoader().load(path)

    @given(
        key=st.from_regex(r"[A-Za-z][A-Za-z0-9_]{0,15}", fullmatch=True),
        value=st.from_regex(r"[A-Za-z0-9 .,]{1,30}", fullmatch=True).map(str.strip).filter(bool),
    )
    def test_quoted_value_roundtrip(self, tmp_path: Path, key: str, value: str) -> None:
        """Any simple quoted value is read back exactly."""
        path = tmp_path / "prop.ini"
        path.write_text(f'{key} = "{value}"\n', encoding="utf-8")

        assert IniFileLoader().load(path).data[key] == value


# ============================================================================
# YAML LOADER
# ============================================================================


class TestYamlFileLoader:
    """Parsing of YAML language files."""

    def test_flat_mapping(self, tmp_path: Path) -> None:
        """Top-level scalars become string values."""
        path = tmp_path / "fi.yaml"
        path.write_text("Search: Hae\nCount: 3\n", encoding="utf-8")

        source = YamlFileLoader().load(path)

        assert source.format is SourceFormat.YAML
        assert dict(source.data) == {"Search": "Hae", "Count": "3"}

    def test_nested_keys_flattened(self, tmp_path: Path) -> None:
        """Nested mappings flatten to dotted keys."""
        path = tmp_path / "fi.yaml"
        path.write_text("facets:\n  format: Aineistotyyppi\n  year: Vuosi\n", encoding="utf-8")

        data = YamlFileLoader().load(path).data

        assert data["facets.format"] == "Aineistotyyppi"
        assert data["facets.year"] == "Vuosi"

    def test_extends_string_and_list(self, tmp_path: Path) -> None:
        """@extends accepts a string, @parent_yaml a list; both are stripped."""
        path = tmp_path / "fi.yaml"
        path.write_text(
            '"@extends": base.yaml\n"@parent_yaml": [a.yaml, b.yaml]\nk: v\n', encoding="utf-8"
        )

        source = YamlFileLoader().load(path)

        assert source.extends == ("base.yaml", "a.yaml", "b.yaml")
        assert dict(source.data) == {"k": "v"}

    def test_null_and_empty_follow_blank_rule(self, tmp_path: Path) -> None:
        """null and "" become the marker, or "" with conversion off."""
        path = tmp_path / "fi.yaml"
        path.write_text('a: ~\nb: ""\n', encoding="utf-8")

        assert dict(YamlFileLoader().load(path).data) == {
            "a": NON_JOINING_BLANK,
            "b": NON_JOINING_BLANK,
        }
        assert dict(YamlFileLoader(convert_blanks=False).load(path).data) == {"a": "", "b": ""}

    def test_yes_no_words_stay_text(self, tmp_path: Path) -> None:
        """Yes / No / On keys and values are not read as booleans."""
        path = tmp_path / "fi.yaml"
        path.write_text("No: Ei\nYes: Kyllä\nanswer: No\nOn: Päällä\n", encoding="utf-8")

        assert dict(YamlFileLoader().load(path).data) == {
            "No": "Ei",
            "Yes": "Kyllä",
            "answer": "No",
            "On": "Päällä",
        }

    def test_number_like_values_keep_source_text(self, tmp_path: Path) -> None:
        """Clock times and zero-padded codes are not converted to integers."""
        path = tmp_path / "fi.yaml"
        path.write_text("opens: 10:30\ncode: 017\nprice: 1_000\n", encoding="utf-8")

        assert dict(YamlFileLoader().load(path).data) == {
            "opens": "10:30",
            "code": "017",
            "price": "1_000",
        }

    def test_null_keyword_still_blank(self, tmp_path: Path) -> None:
        """Only the null resolver remains: ``null`` is still a blank value."""
        path = tmp_path / "fi.yaml"
        path.write_text("a: null\n", encoding="utf-8")

        assert YamlFileLoader(convert_blanks=False).load(path).data["a"] == ""

    def test_empty_file_is_empty_domain(self, tmp_path: Path) -> None:
        """An empty YAML document loads as an empty domain."""
        path = tmp_path / "fi.yaml"
        path.write_text("", encoding="utf-8")

        assert YamlFileLoader().load(path).data == TextDomain.empty()

    def test_non_mapping_root_rejected(self, tmp_path: Path) -> None:
        """A list at top level is not a language file."""
        path = tmp_path / "fi.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(TranslationParseError, match="top level must be a mapping"):
            YamlFileLoader().load(path)

    def test_syntax_error_names_path(self, tmp_path: Path) -> None:
        """PyYAML errors are wrapped with the file path."""
        path = tmp_path / "fi.yaml"
        path.write_text("key: [unclosed\n", encoding="utf-8")

        with pytest.raises(TranslationParseError) as exc_info:
            YamlFileLoader().load(path)

        assert exc_info.value.path == str(path)
        assert exc_info.value.__cause__ is not None

    def test_sequence_value_rejected(self, tmp_path: Path) -> None:
        """Lists are not translatable values."""
        path = tmp_path / "fi.yaml"
        path.write_text("k:\n  - a\n", encoding="utf-8")

        with pytest.raises(TranslationParseError, match="sequence value"):
            YamlFileLoader().load(path)

    def test_invalid_extends_value(self, tmp_path: Path) -> None:
        """@extends must be a string or list of strings."""
        path = tmp_path / "fi.yaml"
        path.write_text('"@extends": []\n', encoding="utf-8")

        with pytest.raises(TranslationParseError) as exc_info:
            YamlFileLoader().load(path)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.INVALID_DIRECTIVE


# ============================================================================
# SUFFIX DISPATCH
# ============================================================================


class TestSourceFileLoader:
    """Dispatch on file suffix."""

    @pytest.mark.parametrize(
        ("name", "content", "expected"),
        [
            ("en.ini", "k = v\n", SourceFormat.INI),
            ("en.yaml", "k: v\n", SourceFormat.YAML),
            ("en.yml", "k: v\n", SourceFormat.YAML),
        ],
    )
    def test_dispatch(self, tmp_path: Path, name: str, content: str, expected: SourceFormat) -> None:
        """Each supported suffix reaches its loader."""
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")

        source = SourceFileLoader().load(path)

        assert source.format is expected
        assert source.data["k"] == "v"

    def test_unknown_suffix(self, tmp_path: Path) -> None:
        """Unsupported suffixes are a parse error."""
        path = tmp_path / "en.json"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(TranslationParseError) as exc_info:
            SourceFileLoader().load(path)

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.UNSUPPORTED_FORMAT

    def test_blank_policy_forwarded(self, tmp_path: Path) -> None:
        """convert_blanks reaches both format loaders."""
        (tmp_path / "en.ini").write_text('k = ""\n', encoding="utf-8")
        (tmp_path / "en.yaml").write_text("k: ''\n", encoding="utf-8")
        loader = SourceFileLoader(convert_blanks=False)

        assert loader.load(tmp_path / "en.ini").data["k"] == ""
        assert loader.load(tmp_path / "en.yaml").data["k"] == ""
