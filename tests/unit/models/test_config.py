"""SrcDstConfig のテスト。

既定値、拡張子の正規化、不正値の拒否、不変性を検証する。
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from srcdst.models.config import DEFAULT_MAX_NAME_ATTEMPTS, SrcDstConfig


class TestDefaults:
    """既定値を検証する。"""

    def test_new(self) -> None:
        config = SrcDstConfig.new("png")
        assert config.default_extension == "png"
        assert config.match_expression is None
        assert config.explicit_container is None
        assert config.allow_from_stdin is True
        assert config.allow_to_stdout is True
        assert config.auto_named_dst_file is True
        assert config.auto_named_dst_dir is True
        assert config.allow_inplace is False
        assert config.create_container is True
        assert config.max_name_attempts == DEFAULT_MAX_NAME_ATTEMPTS

    def test_extension_required(self) -> None:
        with pytest.raises(ValidationError):
            SrcDstConfig()  # type: ignore[call-arg]


class TestExtension:
    """default_extension の正規化を検証する。"""

    def test_leading_dot_removed(self) -> None:
        assert SrcDstConfig.new(".png").default_extension == "png"

    def test_empty_means_no_extension(self) -> None:
        assert SrcDstConfig.new("").default_extension == ""

    def test_compound_extension(self) -> None:
        assert SrcDstConfig.new("tar.gz").default_extension == "tar.gz"

    def test_separator_rejected(self) -> None:
        with pytest.raises(ValidationError, match="path separator"):
            SrcDstConfig.new("a/b")


class TestValidation:
    """不正な値の拒否を検証する。"""

    def test_extra_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SrcDstConfig(default_extension="png", unknown=1)  # type: ignore[call-arg]

    def test_strict_bool(self) -> None:
        """文字列や数値を bool として受け付けない。"""
        with pytest.raises(ValidationError):
            SrcDstConfig(
                default_extension="png",
                allow_inplace="yes",  # type: ignore[arg-type]
            )

    def test_empty_container_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SrcDstConfig(default_extension="png", explicit_container="")

    def test_sentinel_container_rejected(self) -> None:
        with pytest.raises(ValidationError, match="sentinel"):
            SrcDstConfig(default_extension="png", explicit_container="-")

    @pytest.mark.parametrize("value", ["a/b", "/abs/out", "../out", ".", ".."])
    def test_container_must_be_plain_name(self, value: str) -> None:
        """コンテナは SRC の親ディレクトリ直下にのみ作られる。"""
        with pytest.raises(ValidationError, match="plain directory name"):
            SrcDstConfig(default_extension="png", explicit_container=value)

    @pytest.mark.parametrize("value", [0, -1])
    def test_max_name_attempts_positive(self, value: int) -> None:
        with pytest.raises(ValidationError):
            SrcDstConfig(default_extension="png", max_name_attempts=value)

    def test_frozen(self) -> None:
        config = SrcDstConfig.new("png")
        with pytest.raises(ValidationError):
            config.allow_inplace = True  # type: ignore[misc]

    def test_match_expression_kept_raw(self) -> None:
        """マッチ式は構築時にはコンパイルしない。"""
        config = SrcDstConfig(default_extension="png", match_expression="{3..=1}")
        assert config.match_expression == "{3..=1}"
