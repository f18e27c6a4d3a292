from django.urls import path

from . import views

urlpatterns = [
    path("pricing", views.calculate_price_view, name="calculate_price"),
    path("pricing/by-name", views.calculate_price_by_name_view, name="calculate_price_by_name"),
]
