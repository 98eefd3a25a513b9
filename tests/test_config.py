"""Tests for pi.readline.config."""

from __future__ import annotations

import pytest

from pi.readline.config import (
    WORD_MODIFIER_ENV,
    EditorConfig,
    WordModifier,
    resolve_word_modifier,
)


class TestResolveWordModifier:
    def test_darwin_defaults_to_alt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(WORD_MODIFIER_ENV, raising=False)
        assert resolve_word_modifier(platform="darwin") is WordModifier.ALT

    @pytest.mark.parametrize("platform", ["linux", "win32", "freebsd13"])
    def test_other_platforms_default_to_ctrl(
        self, monkeypatch: pytest.MonkeyPatch, platform: str
    ) -> None:
        monkeypatch.delenv(WORD_MODIFIER_ENV, raising=False)
        assert resolve_word_modifier(platform=platform) is WordModifier.CTRL

    def test_env_overrides_platform(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(WORD_MODIFIER_ENV, "ALT")
        assert resolve_word_modifier(platform="linux") is WordModifier.ALT

    def test_explicit_value_overrides_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(WORD_MODIFIER_ENV, "alt")
        assert resolve_word_modifier("ctrl", platform="darwin") is WordModifier.CTRL
        assert resolve_word_modifier(WordModifier.CTRL) is WordModifier.CTRL

    def test_empty_env_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(WORD_MODIFIER_ENV, "")
        assert resolve_word_modifier(platform="darwin") is WordModifier.ALT

    def test_unknown_value_raises(self) -> None:
        with pytest.raises(ValueError, match="ctrl' or 'alt"):
            resolve_word_modifier("meta")


class TestEditorConfig:
    def test_defaults(self) -> None:
        config = EditorConfig(word_modifier=WordModifier.CTRL)
        assert config.secret is False
        assert config.mask is None
        assert config.style is None
        assert config.candidates == ()

    def test_secret_requires_mask(self) -> None:
        with pytest.raises(ValueError, match="mask"):
            EditorConfig(secret=True)

    def test_mask_must_be_one_character(self) -> None:
        with pytest.raises(ValueError):
            EditorConfig(secret=True, mask="**")
        with pytest.raises(ValueError):
            EditorConfig(secret=True, mask="")

    def test_candidates_are_frozen(self) -> None:
        source = ["a", "b"]
        config = EditorConfig(candidates=source)  # type: ignore[arg-type]
        source.append("c")
        assert config.candidates == ("a", "b")

    def test_create_resolves_word_modifier(self) -> None:
        config = EditorConfig.create(word_modifier="alt", candidates=iter(["x"]))
        assert config.word_modifier is WordModifier.ALT
        assert config.candidates == ("x",)

    def test_word_modifier_string_is_converted(self) -> None:
        config = EditorConfig(word_modifier="alt")  # type: ignore[arg-type]
        assert config.word_modifier is WordModifier.ALT

    def test_word_modifier_name_is_case_insensitive(self) -> None:
        config = EditorConfig(word_modifier="CTRL")  # type: ignore[arg-type]
        assert config.word_modifier is WordModifier.CTRL

    def test_unknown_word_modifier_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="word modifier"):
            EditorConfig(word_modifier="bogus")  # type: ignore[arg-type]
