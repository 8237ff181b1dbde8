"""
Tax Calculation Views
JSON boundary used by the form and report layers to run the FY 2024-25 engine
"""

from datetime import datetime

from django.http import JsonResponse
from rest_framework.decorators import api_view

from api.serializers import (
    TaxCalculationRequestSerializer, RegimeComparisonRequestSerializer, SurchargeRateQuerySerializer
)
from api.utils.pii_logger import get_pii_safe_logger
from api.utils.tax_engine import IncomeTaxCalculator, SurchargeEngine

logger = get_pii_safe_logger(__name__)


@api_view(['POST'])
def calculate_tax(request):
    """Calculate tax payable for one regime"""
    serializer = TaxCalculationRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return JsonResponse(serializer.errors, status=400)

    data = serializer.validated_data
    try:
        result = IncomeTaxCalculator.calculate_tax_payable(
            data['gross_income'], data['total_deductions'], data['regime']
        )
        return JsonResponse(result.to_dict())
    except Exception as e:
        logger.error_with_amounts(
            f"Error calculating tax ({data['regime']} regime) for income {{gross_income}}: {type(e).__name__}",
            gross_income=data['gross_income'],
        )
        return JsonResponse({'error': 'Unable to calculate tax'}, status=500)


@api_view(['POST'])
def compare_regimes(request):
    """Calculate both regimes and recommend the cheaper one"""
    serializer = RegimeComparisonRequestSerializer(data=request.data)
    if not serializer.is_valid():
        return JsonResponse(serializer.errors, status=400)

    data = serializer.validated_data
    try:
        comparison = IncomeTaxCalculator.compare_tax_regimes(
            data['gross_income'], data['old_regime_deductions']
        )
        logger.info_with_amounts(
            f"Regime comparison completed, recommended: {comparison.recommended_regime.value}, "
            f"savings {{savings}}",
            savings=comparison.savings,
        )
        return JsonResponse(comparison.to_dict())
    except Exception as e:
        logger.error_with_amounts(
            f"Error comparing regimes for income {{gross_income}}: {type(e).__name__}",
            gross_income=data['gross_income'],
        )
        return JsonResponse({'error': 'Unable to compare tax regimes'}, status=500)


@api_view(['GET'])
def tax_configuration(request):
    """Slab, surcharge and cess tables for display"""
    return JsonResponse(IncomeTaxCalculator.get_tax_configuration())


@api_view(['GET'])
def surcharge_rate(request):
    """Applicable surcharge rate for an income level"""
    serializer = SurchargeRateQuerySerializer(data=request.query_params)
    if not serializer.is_valid():
        return JsonResponse(serializer.errors, status=400)

    data = serializer.validated_data
    return JsonResponse(SurchargeEngine.describe_rate(data['income'], data['regime']))


@api_view(['GET'])
def health_check(request):
    """Health check endpoint for monitoring"""
    return JsonResponse({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'service': 'Tax Estimation API',
        'financial_year': '2024-25',
        'version': '1.0.0'
    })
