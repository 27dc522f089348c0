from openapi_har.parser.base import Parameter
from openapi_har.parser.detect import source_for
from openapi_har.translator.urls import base_url, legacy_base_url, materialize_path


def _path_param(name, **fields) -> Parameter:
    return Parameter.model_validate({"name": name, "in": "path", **fields})


OAS = {
    "openapi": "3.0.0",
    "servers": [{"url": "https://api.example.com/v1"}],
    "paths": {
        "/pets": {
            "servers": [{"url": "https://pets.example.com"}],
            "get": {"servers": [{"url": "https://read.example.com/"}]},
            "post": {},
        },
        "/users": {"get": {}},
        "/regions": {
            "get": {
                "servers": [
                    {
                        "url": "https://{region}.example.com:{port}/{base}",
                        "variables": {"region": {"default": "eu"}, "port": {"default": "8443"}},
                    }
                ]
            }
        },
    },
}


class TestBaseUrl:
    def test_operation_servers_win(self):
        assert base_url(source_for(OAS), "/pets", "get") == "https://read.example.com"

    def test_path_servers_do_not_leak_operation_override(self):
        assert base_url(source_for(OAS), "/pets", "post") == "https://pets.example.com"

    def test_document_servers(self):
        assert base_url(source_for(OAS), "/users", "get") == "https://api.example.com/v1"

    def test_server_variables_use_defaults(self):
        assert base_url(source_for(OAS), "/regions", "get") == "https://eu.example.com:8443/{base}"

    def test_swagger_legacy_fields(self):
        doc = {"swagger": "2.0", "host": "api.example.com", "basePath": "/v2", "schemes": ["https"], "paths": {"/a": {"get": {}}}}
        assert base_url(source_for(doc), "/a", "get") == "https://api.example.com/v2"


class TestLegacyBaseUrl:
    def test_scheme_defaults_to_http(self):
        assert legacy_base_url({"host": "example.com", "basePath": "/api"}) == "http://example.com/api"

    def test_root_base_path_collapses(self):
        assert legacy_base_url({"host": "example.com", "basePath": "/", "schemes": ["https"]}) == "https://example.com"

    def test_missing_base_path(self):
        assert legacy_base_url({"host": "example.com"}) == "http://example.com"


class TestMaterializePath:
    def test_substitutes_matrix_explode(self):
        params = [_path_param("id", style="matrix", explode=True, example=[3, 4, 5])]
        assert materialize_path("/pets/{id}", params) == "/pets/;id=3;id=4;id=5"

    def test_substitutes_label(self):
        params = [_path_param("id", style="label", example=[3, 4, 5])]
        assert materialize_path("/pets/{id}", params) == "/pets/.3,4,5"

    def test_unresolved_token_is_left_alone(self):
        params = [_path_param("id", schema={"type": "integer"})]
        assert materialize_path("/pets/{id}", params) == "/pets/{id}"

    def test_caller_values(self):
        params = [_path_param("owner"), _path_param("id", example=1)]
        assert materialize_path("/owners/{owner}/pets/{id}", params, {"owner": "ann"}) == "/owners/ann/pets/1"

    def test_ignores_non_path_parameters(self):
        params = [Parameter.model_validate({"name": "id", "in": "query", "example": 5})]
        assert materialize_path("/pets/{id}", params) == "/pets/{id}"
