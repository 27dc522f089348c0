import json
from pathlib import Path

from click.testing import CliRunner

from openapi_har.cli import main

FIXTURES = Path(__file__).parent / "fixtures"
OAS = str(FIXTURES / "petstore_oas.yaml")
SWAGGER = str(FIXTURES / "petstore_swagger.yaml")


class TestCliHar:
    def test_whole_document(self):
        result = CliRunner().invoke(main, ["har", OAS])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [(e["method"], e["url"]) for e in data][:2] == [
            ("GET", "http://petstore.swagger.io/v1/pets"),
            ("POST", "http://petstore.swagger.io/v1/pets"),
        ]
        assert data[1]["description"] == "Creates a new pet in the store"
        assert [h["postData"]["mimeType"] for h in data[1]["hars"]] == [
            "application/json",
            "application/x-www-form-urlencoded",
            "multipart/form-data",
        ]

    def test_single_operation_with_values(self):
        result = CliRunner().invoke(
            main,
            ["har", OAS, "--path", "/owners/{ownerId}/pets", "--method", "get", "--value", "ownerId=o-1", "--value", "tags=[bird, fish]"],
        )
        assert result.exit_code == 0
        (har,) = json.loads(result.output)
        assert har["url"] == "http://petstore.swagger.io/v1/owners/o-1/pets"
        assert har["queryString"] == [{"name": "tags", "value": "bird"}, {"name": "tags", "value": "fish"}]
        assert har["httpVersion"] == "HTTP/1.1"

    def test_output_file(self, tmp_path):
        output = tmp_path / "out" / "hars.json"
        result = CliRunner().invoke(main, ["har", SWAGGER, "--path", "/pet", "--method", "POST", "-o", str(output)])
        assert result.exit_code == 0
        assert "Saved to" in result.output
        (har,) = json.loads(output.read_text(encoding="utf-8"))
        assert har["url"] == "https://petstore.swagger.io/v2/pet"
        assert har["comment"] == "application/json"

    def test_path_requires_method(self):
        result = CliRunner().invoke(main, ["har", OAS, "--path", "/pets"])
        assert result.exit_code == 2
        assert "--method is required" in result.output

    def test_unknown_operation(self):
        result = CliRunner().invoke(main, ["har", OAS, "--path", "/pets", "--method", "put"])
        assert result.exit_code == 1
        assert "No such operation" in result.output

    def test_malformed_value(self):
        result = CliRunner().invoke(main, ["har", OAS, "--path", "/pets", "--method", "get", "--value", "limit"])
        assert result.exit_code == 2
        assert "Expected name=value" in result.output

    def test_not_an_api_document(self, tmp_path):
        f = tmp_path / "doc.md"
        f.write_text("# API Docs\nSome text")
        result = CliRunner().invoke(main, ["har", str(f)])
        assert result.exit_code == 1
        assert "does not contain an API description" in result.output

    def test_unsupported_version(self, tmp_path):
        f = tmp_path / "old.json"
        f.write_text('{"swagger": "1.2", "paths": {}}')
        result = CliRunner().invoke(main, ["har", str(f)])
        assert result.exit_code == 1
        assert "Unsupported Swagger version" in result.output

    def test_broken_reference(self, tmp_path):
        f = tmp_path / "broken.json"
        f.write_text(json.dumps({"openapi": "3.0.0", "paths": {"/a": {"$ref": "#/components/pathItems/A"}}}))
        result = CliRunner().invoke(main, ["har", str(f)])
        assert result.exit_code == 1
        assert "#/components/pathItems/A" in result.output


class TestCliSnippets:
    def test_single_operation(self):
        result = CliRunner().invoke(main, ["snippets", OAS, "-t", "shell_curl", "--path", "/pets", "--method", "get"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["resource"] == "pets"
        (snippet,) = data["snippets"]
        assert snippet["title"] == "Shell + Curl"
        assert snippet["content"].startswith("curl --request GET")

    def test_whole_document(self):
        result = CliRunner().invoke(main, ["snippets", SWAGGER, "-t", "shell", "-t", "http"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [d["resource"] for d in data] == ["findByStatus", "inventory", "pet", "pet", "pet", "uploadImage"]
        assert [s["id"] for s in data[0]["snippets"]] == ["shell", "http"]

    def test_invalid_target(self):
        result = CliRunner().invoke(main, ["snippets", OAS, "-t", "cobol"])
        assert result.exit_code == 1
        assert "Invalid target: cobol" in result.output

    def test_target_is_required(self):
        result = CliRunner().invoke(main, ["snippets", OAS])
        assert result.exit_code == 2
