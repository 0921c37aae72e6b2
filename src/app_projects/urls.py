from django.urls import path

from app_projects import views

app_name = "app_projects"

urlpatterns = [
    # Without the "api/v1/projects/" prefix, added in core/urls.py via include()
    path(
        "<int:project_id>/voorcalculatie/",
        views.VoorcalculatieAPIView.as_view(),
        name="voorcalculatie",
    ),
    path(
        "<int:project_id>/nacalculatie/",
        views.NacalculatieAPIView.as_view(),
        name="nacalculatie",
    ),
    path(
        "<int:project_id>/nacalculatie/conclusie/",
        views.NacalculatieConclusieAPIView.as_view(),
        name="nacalculatie-conclusie",
    ),
]
