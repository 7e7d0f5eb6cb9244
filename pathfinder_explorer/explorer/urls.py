from django.urls import path

from . import views

app_name = "explorer"

urlpatterns = [
    path("api/workspace/", views.workspace_create_api, name="workspace-create-api"),
    path("api/workspace/<str:workspace_id>/", views.workspace_detail_api, name="workspace-detail-api"),
    path("api/workspace/<str:workspace_id>/clear/", views.workspace_clear_api, name="workspace-clear-api"),
    path("api/workspace/<str:workspace_id>/nodes/", views.node_add_api, name="node-add-api"),
    path(
        "api/workspace/<str:workspace_id>/nodes/<str:node_id>/position/",
        views.node_position_api,
        name="node-position-api",
    ),
    path(
        "api/workspace/<str:workspace_id>/nodes/<str:node_id>/delete/",
        views.node_delete_api,
        name="node-delete-api",
    ),
    path("api/workspace/<str:workspace_id>/edges/", views.edge_add_api, name="edge-add-api"),
    path(
        "api/workspace/<str:workspace_id>/edges/<str:edge_id>/weight/",
        views.edge_weight_api,
        name="edge-weight-api",
    ),
    path(
        "api/workspace/<str:workspace_id>/edges/<str:edge_id>/delete/",
        views.edge_delete_api,
        name="edge-delete-api",
    ),
    path("api/workspace/<str:workspace_id>/path/", views.shortest_path_api, name="shortest-path-api"),
]
