from django.urls import path

from .views import SplitCommitView, SplitPreviewView

app_name = "splits"

urlpatterns = [
    path("preview/", SplitPreviewView.as_view(), name="split-preview"),
    path("commit/", SplitCommitView.as_view(), name="split-commit"),
]
