from django.contrib import admin
from django.urls import path, include

from .views import health_check

urlpatterns = [
    path('admin/', admin.site.urls),
    path("health/", health_check), # Health check endpoint

    # Authentication endpoints (register, login, refresh, me)
    path('api/auth/', include('accounts.urls')),

    # Rider APIs (fare estimate, booking, current ride polling, history)
    path('api/rider/', include('riders.urls')),

    # Driver APIs (available rides polling, accept, complete, current ride, history)
    path('api/driver/', include('drivers.urls')),
]
