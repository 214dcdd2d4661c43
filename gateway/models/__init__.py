from gateway.models.patient import Patient

__all__ = ["Patient"]
