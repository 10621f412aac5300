"""Activity Tracking package.

Resources (workers and machines) are booked onto construction works through
time-stamped activities. The package is organized by feature modules
(scheduling, activities, catalog, ...) with a thin Flask controller layer and
service/repository layers underneath.
"""
