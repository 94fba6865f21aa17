from django.urls import path

from . import views

app_name = "apps.videomarkup"

urlpatterns = [
    path("config/", views.module_config, name="config"),
]
