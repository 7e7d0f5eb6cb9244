from django.urls import include, path

urlpatterns = [
    path("", include("pathfinder_explorer.explorer.urls")),
]
