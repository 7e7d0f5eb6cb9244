import json
import logging
from uuid import uuid4

from django.conf import settings
from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from api.pathfinder_api.errors import InvalidEndpointError, SelectionError
from core.pathfinder_platform.workspace import Workspace

WORKSPACES: dict[str, Workspace] = {}
LOGGER = logging.getLogger(__name__)


def json_error(
    status_code: int,
    error: str,
    message: str,
    expected: dict[str, object] | None = None,
    details: object | None = None,
) -> JsonResponse:
    payload: dict[str, object] = {
        "ok": False,
        "status": status_code,
        "error": error,
        "message": message,
    }
    if expected is not None:
        payload["expected"] = expected
    if details is not None:
        payload["details"] = details
    return JsonResponse(payload, status=status_code)


def _parse_json_body(request: HttpRequest, allow_empty: bool = False) -> tuple[dict | None, JsonResponse | None]:
    if not request.body:
        if allow_empty:
            return {}, None
        return None, json_error(400, "BadRequest", "Invalid JSON body.")

    try:
        body = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None, json_error(400, "BadRequest", "Invalid JSON body.")

    if not isinstance(body, dict):
        return None, json_error(400, "BadRequest", "JSON body must be an object.")
    return body, None


def _get_workspace(workspace_id: str) -> tuple[Workspace | None, JsonResponse | None]:
    workspace = WORKSPACES.get(workspace_id)
    if workspace is None:
        return None, json_error(404, "NotFound", f"Workspace '{workspace_id}' was not found.")
    return workspace, None


def _workspace_payload(workspace_id: str, workspace: Workspace) -> dict:
    payload = workspace.to_dict()
    payload["ok"] = True
    payload["workspace_id"] = workspace_id
    return payload


# ==========================================================
# WORKSPACE
# ==========================================================

@csrf_exempt
@require_POST
def workspace_create_api(request: HttpRequest) -> JsonResponse:
    strategy = getattr(settings, "PATHFINDER_STRATEGY", "scan")
    try:
        workspace = Workspace(strategy=strategy)
    except ValueError as exc:
        LOGGER.exception("Invalid PATHFINDER_STRATEGY setting.")
        return json_error(500, "ConfigurationError", str(exc))

    workspace_id = str(uuid4())
    WORKSPACES[workspace_id] = workspace
    LOGGER.info("Created workspace %s (strategy=%s)", workspace_id, strategy)
    return JsonResponse({"ok": True, "workspace_id": workspace_id}, status=201)


@require_GET
def workspace_detail_api(request: HttpRequest, workspace_id: str) -> JsonResponse:
    workspace, error_response = _get_workspace(workspace_id)
    if error_response:
        return error_response

    payload = _workspace_payload(workspace_id, workspace)
    payload["info"] = workspace.graph_info()
    return JsonResponse(payload)


@csrf_exempt
@require_POST
def workspace_clear_api(request: HttpRequest, workspace_id: str) -> JsonResponse:
    workspace, error_response = _get_workspace(workspace_id)
    if error_response:
        return error_response

    workspace.clear_graph()
    return JsonResponse(_workspace_payload(workspace_id, workspace))


# ==========================================================
# NODES
# ==========================================================

@csrf_exempt
@require_POST
def node_add_api(request: HttpRequest, workspace_id: str) -> JsonResponse:
    workspace, error_response = _get_workspace(workspace_id)
    if error_response:
        return error_response

    body, error_response = _parse_json_body(request)
    if error_response:
        return error_response

    if "x" not in body or "y" not in body:
        return json_error(
            400,
            "BadRequest",
            "x and y are required.",
            expected={"x": "number", "y": "number", "label": "string|null"},
        )

    node = workspace.add_node(body["x"], body["y"], body.get("label"))
    return JsonResponse({"ok": True, "node": node.to_dict()}, status=201)


@csrf_exempt
@require_POST
def node_position_api(request: HttpRequest, workspace_id: str, node_id: str) -> JsonResponse:
    workspace, error_response = _get_workspace(workspace_id)
    if error_response:
        return error_response

    body, error_response = _parse_json_body(request)
    if error_response:
        return error_response

    if "x" not in body or "y" not in body:
        return json_error(400, "BadRequest", "x and y are required.", expected={"x": "number", "y": "number"})

    workspace.update_node_position(node_id, body["x"], body["y"])
    node = workspace.model.get_node(node_id)
    return JsonResponse({"ok": True, "node": node.to_dict() if node else None})


@csrf_exempt
@require_POST
def node_delete_api(request: HttpRequest, workspace_id: str, node_id: str) -> JsonResponse:
    workspace, error_response = _get_workspace(workspace_id)
    if error_response:
        return error_response

    workspace.delete_node(node_id)
    return JsonResponse(_workspace_payload(workspace_id, workspace))


# ==========================================================
# EDGES
# ==========================================================

@csrf_exempt
@require_POST
def edge_add_api(request: HttpRequest, workspace_id: str) -> JsonResponse:
    workspace, error_response = _get_workspace(workspace_id)
    if error_response:
        return error_response

    body, error_response = _parse_json_body(request)
    if error_response:
        return error_response

    from_id = body.get("from")
    to_id = body.get("to")
    if not from_id or not to_id:
        return json_error(
            400,
            "BadRequest",
            "from and to are required.",
            expected={"from": "string", "to": "string", "weight": "number|null"},
        )

    edge = workspace.add_edge(str(from_id), str(to_id), body.get("weight", 1.0))
    if edge is None:
        LOGGER.warning("Edge %s -> %s was not added.", from_id, to_id)
        return JsonResponse({"ok": True, "created": False, "edge": None})
    return JsonResponse({"ok": True, "created": True, "edge": edge.to_dict()}, status=201)


@csrf_exempt
@require_POST
def edge_weight_api(request: HttpRequest, workspace_id: str, edge_id: str) -> JsonResponse:
    workspace, error_response = _get_workspace(workspace_id)
    if error_response:
        return error_response

    body, error_response = _parse_json_body(request)
    if error_response:
        return error_response

    workspace.update_edge_weight(edge_id, body.get("weight"))
    edge = workspace.model.get_edge(edge_id)
    return JsonResponse({"ok": True, "edge": edge.to_dict() if edge else None})


@csrf_exempt
@require_POST
def edge_delete_api(request: HttpRequest, workspace_id: str, edge_id: str) -> JsonResponse:
    workspace, error_response = _get_workspace(workspace_id)
    if error_response:
        return error_response

    workspace.delete_edge(edge_id)
    return JsonResponse(_workspace_payload(workspace_id, workspace))


# ==========================================================
# COMPUTATION
# ==========================================================

@csrf_exempt
@require_POST
def shortest_path_api(request: HttpRequest, workspace_id: str) -> JsonResponse:
    workspace, error_response = _get_workspace(workspace_id)
    if error_response:
        return error_response

    body, error_response = _parse_json_body(request, allow_empty=True)
    if error_response:
        return error_response

    try:
        start = body.get("start")
        end = body.get("end")
        workspace.select_endpoints(str(start) if start else None, str(end) if end else None)
        result = workspace.run_shortest_path()
    except InvalidEndpointError as exc:
        LOGGER.warning("Rejected shortest path request: %s", exc)
        return json_error(422, "InvalidEndpoint", str(exc), details={"node_ids": list(exc.node_ids)})
    except SelectionError as exc:
        return json_error(400, "BadRequest", str(exc), expected={"start": "string", "end": "string"})
    except Exception as exc:
        LOGGER.exception("Unexpected shortest path failure.")
        return json_error(500, "InternalError", f"Unexpected shortest path failure: {exc}")

    return JsonResponse({"ok": True, "result": result.to_dict()})
