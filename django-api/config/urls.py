from django.urls import include, path

urlpatterns = [
    path("api/", include("calendar_events.urls")),
]
