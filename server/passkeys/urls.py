from django.urls import path

from passkeys import views

urlpatterns = [
    path("attestation/options", views.registration_options, name="registration_options"),
    path("attestation/result", views.registration_result, name="registration_result"),
    path("assertion/options", views.authentication_options, name="authentication_options"),
    path("assertion/result", views.authentication_result, name="authentication_result"),
    path("restricted", views.restricted, name="restricted"),
    path("session/logout", views.session_logout, name="session_logout"),
    path("api/", views.api_root, name="api_root"),
    path("api/health/", views.health_check, name="health_check"),
]
