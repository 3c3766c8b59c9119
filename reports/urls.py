from django.urls import path

from reports.views import DailyReportFormOptionsView, DailyReportListCreateView, OpeningBalanceView

urlpatterns = [
    path("reports/daily/", DailyReportListCreateView.as_view(), name="daily-report-list"),
    path("reports/daily/opening-balance/", OpeningBalanceView.as_view(), name="daily-report-opening-balance"),
    path("reports/daily/form-options/", DailyReportFormOptionsView.as_view(), name="daily-report-form-options"),
]
