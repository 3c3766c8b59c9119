from django.urls import path

from attendance.views import AttendanceCheckInView, AttendanceHistoryView, AttendanceTodayView

urlpatterns = [
    path("attendance/check-in/", AttendanceCheckInView.as_view(), name="attendance-check-in"),
    path("attendance/today/", AttendanceTodayView.as_view(), name="attendance-today"),
    path("attendance/history/", AttendanceHistoryView.as_view(), name="attendance-history"),
]
