from barcodeforge.services.barcode_service import BarcodeService

__all__ = ["BarcodeService"]
