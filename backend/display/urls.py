from django.urls import path

from .views import SerialPortListView

urlpatterns = [
    path("ports/", SerialPortListView.as_view(), name="display-ports"),
]
