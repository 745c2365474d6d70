"""
API integration tests.
"""

import app as app_module


def convert(client, **overrides):
    body = {
        "sourceCode": "function add(a, b) {\n  return a + b;\n}",
        "sourceLanguage": "javascript",
        "targetLanguage": "python",
    }
    body.update(overrides)
    return client.post("/api/convert", json=body)


def test_convert(client):
    """Test a supported conversion"""
    response = convert(client)
    assert response.status_code == 200
    data = response.get_json()
    assert data["id"] == 1
    assert data["targetCode"] == "def add(a, b):\n    return a + b"
    assert data["explanation"]["stepByStep"][0]["title"] == "Code Conversion"


def test_convert_unsupported_pair(client):
    """Test an unsupported pair returns the fallback text"""
    response = convert(client, sourceCode="puts 1", sourceLanguage="ruby", targetLanguage="rust")
    assert response.status_code == 200
    assert response.get_json()["targetCode"] == "// Conversion from ruby to rust is not supported yet\nputs 1"


def test_convert_blank_source(client):
    """Test blank source is rejected"""
    response = convert(client, sourceCode="  ")
    assert response.status_code == 400
    data = response.get_json()
    assert data["message"] == "Invalid request"
    assert "Source code is required" in data["errors"][0]["message"]


def test_convert_unknown_language(client):
    """Test unknown language tags are rejected"""
    response = convert(client, targetLanguage="cobol")
    assert response.status_code == 400
    assert response.get_json()["errors"][0]["field"] == "targetLanguage"


def test_convert_without_body(client):
    """Test a request with no JSON body"""
    response = client.post("/api/convert")
    assert response.status_code == 400


def test_convert_failure(client, monkeypatch):
    """Test converter errors become a 500"""
    def broken(source_code, source_language, target_language):
        raise RuntimeError("boom")

    monkeypatch.setattr(app_module, "translate", broken)
    response = convert(client)
    assert response.status_code == 500
    assert response.get_json() == {"message": "Failed to convert code", "error": "boom"}


def test_get_conversion(client):
    """Test a stored conversion can be fetched"""
    convert(client)
    response = client.get("/api/conversions/1")
    assert response.status_code == 200
    data = response.get_json()
    assert data["sourceLanguage"] == "javascript"
    assert data["targetCode"] == "def add(a, b):\n    return a + b"


def test_get_missing_conversion(client):
    """Test an unknown id is a 404"""
    response = client.get("/api/conversions/42")
    assert response.status_code == 404
    assert response.get_json() == {"message": "Conversion not found"}


def test_list_conversions(client):
    """Test history is listed newest first"""
    convert(client)
    convert(client, sourceCode="x = 1", sourceLanguage="python", targetLanguage="javascript")
    response = client.get("/api/conversions")
    assert response.status_code == 200
    assert [record["id"] for record in response.get_json()] == [2, 1]


def test_languages(client):
    """Test the language catalogue endpoint"""
    response = client.get("/api/languages")
    assert response.status_code == 200
    languages = {language["id"]: language for language in response.get_json()}
    assert len(languages) == 18
    assert languages["python"]["supported"] is True
    assert languages["csharp"]["displayName"] == "C#"
    assert languages["ruby"]["supported"] is False


def test_supported_features(client):
    """Test the supported features endpoint"""
    response = client.get("/supported-features")
    assert response.status_code == 200
    data = response.get_json()
    assert len(data["pairs"]) == 13
    assert {"source": "java", "target": "javascript"} in data["pairs"]
    assert data["features"]
