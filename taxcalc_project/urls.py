"""
URL configuration for the tax estimation service
"""

from django.urls import path, include

urlpatterns = [
    path('api/', include('api.urls')),
]
