from django.urls import path

from fuel_stops import views

urlpatterns = [
    path("", views.trip_planner_view, name="trip-planner"),
    path("api/v1/health", views.health_view, name="health"),
    path("api/v1/trip-plan", views.trip_plan_view, name="trip-plan"),
]
