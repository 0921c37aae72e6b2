from django.urls import path

from app_calculations import views

app_name = "app_calculations"

urlpatterns = [
    # Without the "api/v1/calculations/" prefix, added in core/urls.py via include()
    path("offerte/", views.OfferteCalculateAPIView.as_view(), name="offerte-calculate"),
    path("totals/", views.OfferteTotalsAPIView.as_view(), name="offerte-totals"),
    path(
        "correctiefactoren/",
        views.CorrectieFactorListAPIView.as_view(),
        name="correctiefactoren",
    ),
    path(
        "correctiefactoren/reset/",
        views.CorrectieFactorResetAPIView.as_view(),
        name="correctiefactoren-reset",
    ),
    path("normuren/", views.NormUurListAPIView.as_view(), name="normuren"),
    path(
        "normuren/<int:normuur_id>/",
        views.NormUurDetailAPIView.as_view(),
        name="normuur-detail",
    ),
]
