from django.urls import path
from . import views

app_name = 'payments'

urlpatterns = [
    # Gateway callbacks
    path('vnpay/webhook/', views.vnpay_webhook, name='vnpay-webhook'),
    path('vnpay/return/', views.vnpay_return, name='vnpay-return'),

    # Payer-facing
    path('link/', views.payment_link, name='payment-link'),
    path('qr/', views.payment_qr, name='payment-qr'),
    path('outstanding/', views.outstanding, name='outstanding'),
]
