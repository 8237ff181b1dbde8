from django.urls import path
from .views import calculate_tax, compare_regimes, tax_configuration, surcharge_rate, health_check

urlpatterns = [
    path('tax/calculate/', calculate_tax, name='api_tax_calculate'),
    path('tax/compare/', compare_regimes, name='api_tax_compare'),
    path('tax/configuration/', tax_configuration, name='api_tax_configuration'),
    path('tax/surcharge-rate/', surcharge_rate, name='api_surcharge_rate'),
    path('health/', health_check, name='api_health'),
]
