"""Tests for the command-line interface."""

import json

import pytest

from labelguard.cli import main


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every test where no config/labelguard.yaml exists."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestSafetyCommand:
    """Tests for `labelguard safety`."""

    def test_json_output(self, capsys):
        exit_code = main(["safety", "--ingredients", "Partially Hydrogenated Oil", "--output", "json"])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["safety_score"] == 0
        assert data["risks"][0]["name"] == "Trans Fats"

    def test_markdown_output(self, capsys):
        exit_code = main(["safety", "--ingredients", "sugar, palm oil, cocoa powder, milk powder"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "**Safety Score:** 94/100" in out


class TestAnalyzeCommand:
    """Tests for `labelguard analyze`."""

    def test_dietary_flags(self, capsys):
        exit_code = main([
            "analyze", "--ingredients", "cheese, flour", "--output", "json", "--no-safety",
        ])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["dietary_info"]["vegan"] is False
        assert data["dietary_info"]["vegetarian"] is True
        assert "safety" not in data

    def test_nutrition_file(self, capsys, isolated_cwd):
        nutrition = isolated_cwd / "nutrition.yaml"
        nutrition.write_text(
            "protein: 12\nfiber: 5\ncalories: 150\nsugar: 5\nsodium: 200\nfat: 10\n"
        )
        exit_code = main([
            "analyze", "--name", "Granola", "--ingredients", "oats, almonds",
            "--nutrition", str(nutrition), "--output", "json",
        ])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["name"] == "Granola"
        assert data["health_score"] == 90
        assert data["safety"]["safety_score"] == 100

    def test_ingredients_file_one_per_line(self, capsys, isolated_cwd):
        path = isolated_cwd / "ingredients.txt"
        path.write_text("water\nE129\n\nsugar\n")
        exit_code = main(["analyze", "--ingredients-file", str(path), "--output", "json"])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["ingredients"] == ["water", "E129", "sugar"]
        assert data["safety"]["risks"][0]["name"] == "Red Dye 40"

    def test_tags_and_detect(self, capsys):
        exit_code = main([
            "analyze", "--ingredients", "milk, artificial colors",
            "--allergen", "soy", "--detect", "--output", "json",
        ])

        assert exit_code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["allergens"] == ["soy"]
        assert data["additives"] == ["artificial colors"]

    def test_markdown_output(self, capsys):
        exit_code = main(["analyze", "--name", "Crisps", "--ingredients", "potatoes, palm oil"])

        assert exit_code == 0
        captured = capsys.readouterr()
        assert "# Crisps" in captured.out
        assert "Analyzing 2 ingredients" in captured.err

    def test_missing_nutrition_file(self, capsys):
        exit_code = main([
            "analyze", "--ingredients", "oats", "--nutrition", "missing.yaml",
        ])
        assert exit_code == 1
        assert "Nutrition file not found" in capsys.readouterr().err

    def test_nutrition_file_not_mapping(self, capsys, isolated_cwd):
        path = isolated_cwd / "nutrition.yaml"
        path.write_text("- 1\n- 2\n")
        exit_code = main(["analyze", "--ingredients", "oats", "--nutrition", str(path)])
        assert exit_code == 1
        assert "must contain a mapping" in capsys.readouterr().err


class TestConfigOption:
    """Tests for --config handling."""

    def test_missing_config(self, capsys):
        exit_code = main(["--config", "nope.yaml", "safety", "--ingredients", "oats"])
        assert exit_code == 1
        assert "Settings file not found" in capsys.readouterr().err

    def test_invalid_config(self, capsys, isolated_cwd):
        path = isolated_cwd / "settings.yaml"
        path.write_text("colour: red\n")
        exit_code = main(["--config", str(path), "safety", "--ingredients", "oats"])
        assert exit_code == 1
        assert "CONFIG_INVALID" in capsys.readouterr().err

    def test_default_config_location(self, capsys, isolated_cwd):
        config_dir = isolated_cwd / "config"
        config_dir.mkdir()
        (config_dir / "labelguard.yaml").write_text("risk_thresholds:\n  medium_above: 0\n")

        exit_code = main(["safety", "--ingredients", "palm oil", "--output", "json"])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out)["overall_risk"] == "medium"

    def test_ingredients_required(self):
        with pytest.raises(SystemExit):
            main(["analyze"])
