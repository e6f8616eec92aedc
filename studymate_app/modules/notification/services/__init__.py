from .delivery_service import DeliveryService

__all__ = ['DeliveryService']
