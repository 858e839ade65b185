"""Tests for the CLI."""

import json
from typer.testing import CliRunner
from nounspec.cli.app import app

runner = CliRunner()


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_validate_builtin():
    """The bundled catalogs validate cleanly."""
    result = runner.invoke(app, ["validate", "--strict"])
    assert result.exit_code == 0, result.output
    assert "Registered 36 nouns" in result.output
    assert "Backrefs: 0 inconsistencies" in result.output


def test_validate_with_warnings():
    """--warnings adds the convention lint summary."""
    result = runner.invoke(app, ["validate", "--warnings"])
    assert result.exit_code == 0, result.output
    assert "Conventions:" in result.output


def test_validate_backref_issue_strict(tmp_path):
    """Backref problems are reported, and fail only in strict mode."""
    path = _write(
        tmp_path,
        "ads.json",
        {
            "domain": "ads",
            "nouns": {
                "Ad": {
                    "singular": "ad",
                    "plural": "ads",
                    "relationships": {"adGroup": {"type": "AdGroup", "backref": "ads"}},
                },
                "AdGroup": {"singular": "ad group", "plural": "ad groups"},
            },
        },
    )
    lenient = runner.invoke(app, ["validate", "--no-builtin", str(path)])
    assert lenient.exit_code == 0, lenient.output
    assert "BACKREF_MISSING Ad.adGroup" in lenient.output

    strict = runner.invoke(app, ["validate", "--no-builtin", "--strict", str(path)])
    assert strict.exit_code == 1


def test_validate_strict_from_settings(tmp_path, monkeypatch):
    """NOUNSPEC_STRICT_BACKREFS turns strict mode on."""
    path = _write(
        tmp_path,
        "ads.json",
        {
            "domain": "ads",
            "nouns": {
                "Ad": {
                    "singular": "ad",
                    "plural": "ads",
                    "relationships": {"adGroup": {"type": "AdGroup", "backref": "ads"}},
                },
                "AdGroup": {"singular": "ad group", "plural": "ad groups"},
            },
        },
    )
    monkeypatch.setenv("NOUNSPEC_STRICT_BACKREFS", "true")
    result = runner.invoke(app, ["validate", "--no-builtin", str(path)])
    assert result.exit_code == 1


def test_validate_invalid_descriptor(tmp_path):
    """Registration errors exit non-zero without a traceback."""
    path = _write(
        tmp_path,
        "bad.json",
        {
            "domain": "bad",
            "nouns": {
                "Ad": {
                    "singular": "ad",
                    "plural": "ads",
                    "relationships": {"adGroup": {"type": "AdGroup"}},
                }
            },
        },
    )
    result = runner.invoke(app, ["validate", "--no-builtin", str(path)])
    assert result.exit_code == 1
    assert "AdGroup" in result.output


def test_validate_unknown_category(tmp_path):
    """A category naming an unknown noun fails validation."""
    path = _write(
        tmp_path,
        "labels.json",
        {
            "domain": "labels",
            "categories": {"organization": ["Label", "Tag"]},
            "nouns": {"Label": {"singular": "label", "plural": "labels"}},
        },
    )
    result = runner.invoke(app, ["validate", "--no-builtin", str(path)])
    assert result.exit_code == 1
    assert "Tag" in result.output


def test_validate_catalog_dir_setting(tmp_path, monkeypatch):
    """Catalogs in NOUNSPEC_CATALOG_DIR are loaded next to the bundle."""
    extra = tmp_path / "extra"
    extra.mkdir()
    _write(extra, "labels.json", {"domain": "tags", "nouns": {"Tag": {"singular": "tag", "plural": "tags"}}})
    monkeypatch.setenv("NOUNSPEC_CATALOG_DIR", str(extra))

    result = runner.invoke(app, ["validate"])
    assert result.exit_code == 0, result.output
    assert "Registered 37 nouns" in result.output


def test_list():
    """Nouns are listed by category."""
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0, result.output
    assert "ads: Ad, AdGroup, AdCampaign" in result.output
    assert "tracking: TrackingEvent" in result.output


def test_list_uncategorized(tmp_path):
    """Nouns outside every category are still listed."""
    path = _write(tmp_path, "tags.json", {"domain": "tags", "nouns": {"Tag": {"singular": "tag", "plural": "tags"}}})
    result = runner.invoke(app, ["list", "--no-builtin", "--catalog", str(path)])
    assert result.exit_code == 0, result.output
    assert "(uncategorized): Tag" in result.output


def test_show():
    """show prints the descriptor in wire shape."""
    result = runner.invoke(app, ["show", "DocumentVersion"])
    assert result.exit_code == 0, result.output
    assert '"singular": "document version"' in result.output
    assert '"type": "Document"' in result.output


def test_show_unknown():
    """Unknown nouns exit 1."""
    result = runner.invoke(app, ["show", "Spreadsheet"])
    assert result.exit_code == 1
    assert "Spreadsheet" in result.output


def test_meta():
    """meta prints derived names."""
    result = runner.invoke(app, ["meta", "AdGroup"])
    assert result.exit_code == 0, result.output
    assert '"slug": "ad-group"' in result.output
    assert '"created": "AdGroup.created"' in result.output


def test_export(tmp_path):
    """export writes one merged catalog that loads back."""
    out = tmp_path / "all.json"
    result = runner.invoke(app, ["export", str(out), "--domain", "saas"])
    assert result.exit_code == 0, result.output

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["domain"] == "saas"
    assert len(data["nouns"]) == 36
    assert "Order" in data["external"]
    assert data["nouns"]["Ad"]["relationships"]["adGroup"]["type"] == "AdGroup"
