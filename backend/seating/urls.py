from django.urls import path

from .views import SeatBalancesView

app_name = "seating"

urlpatterns = [
    path("balances/", SeatBalancesView.as_view(), name="seat-balances"),
]
