import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.dependencies import get_model_registry, get_workspace_store
from api.models.analysis import AnalysisOutput
from api.models.enums import ModelId
from api.models.questions import MatchingSet, SingleChoiceSet
from api.services.workspace_service import WorkspaceStore

ANALYSIS = AnalysisOutput(
    key_concepts=["capital"],
    themes=["geography"],
    summary="Paris is the capital of France; Berlin is the capital of Germany.",
)


@pytest.fixture
def registry(make_registry, single_question, matching_question):
    outcome = {
        AnalysisOutput: ANALYSIS,
        SingleChoiceSet: SingleChoiceSet(questions=[single_question]),
        MatchingSet: MatchingSet(questions=[matching_question]),
    }
    return make_registry({ModelId.FLASH_LITE: RuntimeError("429 Too Many Requests")}, default=outcome)


@pytest.fixture
def client(registry):
    store = WorkspaceStore()
    app.dependency_overrides[get_model_registry] = lambda: registry
    app.dependency_overrides[get_workspace_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def _workspace(client: TestClient) -> str:
    response = client.post("/api/workspaces", json={"selectedModel": "gemini-2.5-flash-lite"})
    assert response.status_code == 200
    return response.json()["id"]


def _analyzed_workspace(client: TestClient) -> str:
    workspace_id = _workspace(client)
    response = client.post(
        f"/api/workspaces/{workspace_id}/uploads",
        files=[("files", ("notes.txt", "Paris is the capital of France.".encode("utf-8"), "text/plain"))],
    )
    assert response.status_code == 200
    return workspace_id


def _generate(client: TestClient, workspace_id: str, question_type: str = "single-choice") -> dict:
    response = client.post(
        f"/api/workspaces/{workspace_id}/questions/generate",
        json={"numberOfQuestions": 1, "questionType": question_type, "difficulty": "easy"},
    )
    assert response.status_code == 200
    return response.json()


def test_list_models(client: TestClient) -> None:
    models = client.get("/api/models").json()
    assert [m["id"] for m in models] == ["gemini-2.5-flash-lite", "gemini-2.5-flash", "gemini-2.5-pro"]
    assert sum(m["isDefault"] for m in models) == 1


def test_upload_analysis_with_fallback(client: TestClient) -> None:
    workspace_id = _workspace(client)
    response = client.post(
        f"/api/workspaces/{workspace_id}/uploads",
        files=[
            ("files", ("notes.txt", b"Paris is the capital of France.", "text/plain")),
            ("files", ("old.doc", b"\xd0\xcf", "application/msword")),
        ],
    )
    body = response.json()

    assert response.status_code == 200
    assert body["analysis"]["summary"] == ANALYSIS.summary
    assert body["analysis"]["usedModel"] == "gemini-2.5-flash"
    assert body["analysis"]["fallbackUsed"] is True
    assert body["selectedModel"] == "gemini-2.5-flash"
    assert body["notice"] == "Модель «Flash-Lite (по умолчанию)» не отвечает — использована «Flash»."
    assert body["files"][1]["error"].startswith("Legacy .doc")

    state = client.get(f"/api/workspaces/{workspace_id}").json()
    assert state["analysis"]["themes"] == ["geography"]
    assert state["questions"] == []


def test_upload_without_usable_files(client: TestClient) -> None:
    workspace_id = _workspace(client)
    response = client.post(
        f"/api/workspaces/{workspace_id}/uploads",
        files=[("files", ("old.doc", b"\xd0\xcf", "application/msword"))],
    )
    assert response.status_code == 400


def test_analysis_endpoint_validates_items(client: TestClient) -> None:
    workspace_id = _workspace(client)
    response = client.post(
        f"/api/workspaces/{workspace_id}/analysis",
        json={"contents": [{"fileName": "scan.png", "contentType": "image"}]},
    )
    assert response.status_code == 400
    assert "scan.png" in response.json()["detail"]


def test_model_failure_is_reported(make_registry) -> None:
    store = WorkspaceStore()
    app.dependency_overrides[get_model_registry] = lambda: make_registry(default=ValueError("bad schema"))
    app.dependency_overrides[get_workspace_store] = lambda: store
    try:
        client = TestClient(app)
        workspace_id = _workspace(client)
        response = client.post(
            f"/api/workspaces/{workspace_id}/analysis",
            json={"contents": [{"fileName": "a.txt", "contentType": "text", "rawTextContent": "text"}]},
        )
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to analyze content: bad schema"


def test_generate_requires_analysis(client: TestClient) -> None:
    workspace_id = _workspace(client)
    response = client.post(
        f"/api/workspaces/{workspace_id}/questions/generate",
        json={"questionType": "single-choice"},
    )
    assert response.status_code == 400


def test_generate_and_edit_single_choice(client: TestClient) -> None:
    workspace_id = _analyzed_workspace(client)
    body = _generate(client, workspace_id)
    question = body["questions"][0]
    base = f"/api/workspaces/{workspace_id}/questions/{question['id']}"

    assert body["usedModel"] == "gemini-2.5-flash"
    assert question["editedCorrectAnswer"] == "Paris"

    paris = next(o["id"] for o in question["editedOptions"] if o["text"] == "Paris")
    renamed = client.patch(f"{base}/options/{paris}", json={"text": "Paris, France"}).json()["question"]
    assert renamed["editedCorrectAnswer"] == "Paris, France"

    added = client.post(f"{base}/options", json={}).json()
    assert added["option"]["text"] == "Новый вариант 4"

    answered = client.put(f"{base}/answer", json={"optionText": "Новый вариант 4"}).json()["question"]
    assert answered["editedCorrectAnswer"] == "Новый вариант 4"

    removed = client.delete(f"{base}/options/{added['option']['id']}").json()["question"]
    assert removed["editedCorrectAnswer"] == "Berlin"

    updated = client.patch(base, json={"questionText": "Capital?", "selected": False}).json()["question"]
    assert updated["editedQuestionText"] == "Capital?"
    assert updated["selected"] is False

    assert client.patch(base, json={"correctAnswer": "x"}).status_code == 400


def test_option_limits_return_conflict(client: TestClient) -> None:
    workspace_id = _analyzed_workspace(client)
    question = _generate(client, workspace_id, "matching")["questions"][0]
    base = f"/api/workspaces/{workspace_id}/questions/{question['id']}"

    response = client.delete(f"{base}/options/{question['editedPrompts'][0]['id']}", params={"is_prompt": True})
    assert response.status_code == 409
    assert response.json()["title"] == "Минимум элементов"

    berlin = next(o["id"] for o in question["editedOptions"] if o["text"] == "Berlin")
    germany = next(p["id"] for p in question["editedPrompts"] if p["text"] == "Germany")
    client.patch(f"{base}/options/{berlin}", json={"text": "Berlin, Germany"})
    matched = client.put(f"{base}/matches/{germany}", json={"optionText": "Berlin, Germany"}).json()["question"]
    assert matched["editedCorrectMatches"] == {"France": "Paris", "Germany": "Berlin, Germany"}


def test_exports(client: TestClient) -> None:
    workspace_id = _analyzed_workspace(client)
    question = _generate(client, workspace_id)["questions"][0]

    gift = client.get(f"/api/workspaces/{workspace_id}/export/gift")
    assert gift.status_code == 200
    assert gift.headers["content-disposition"] == 'attachment; filename="test_questions.txt"'
    assert gift.text.startswith("::Вопрос 1::Which city is the capital of France? {")

    exported = client.get(f"/api/workspaces/{workspace_id}/export/json")
    assert exported.headers["content-disposition"] == 'attachment; filename="test_questions.json"'
    assert exported.json()["questions"][0]["correctAnswer"] == "Paris"

    client.delete(f"/api/workspaces/{workspace_id}/questions/{question['id']}")
    response = client.get(f"/api/workspaces/{workspace_id}/export/json")
    assert response.status_code == 400
    assert response.json()["detail"] == "Нет выбранных вопросов. Пожалуйста, выберите вопросы для сохранения."


def test_unknown_workspace_and_question(client: TestClient) -> None:
    assert client.get("/api/workspaces/missing").status_code == 404
    assert client.delete("/api/workspaces/missing").status_code == 404

    workspace_id = _workspace(client)
    assert client.get(f"/api/workspaces/{workspace_id}/questions/missing").status_code == 404
    assert client.delete(f"/api/workspaces/{workspace_id}").json() == {"status": "deleted"}
