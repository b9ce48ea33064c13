"""
Demo data for offline operation.
"""

from .generator import DEMO_MEDICINES, DEMO_PHARMACIES, DemoDataGenerator

__all__ = ['DEMO_MEDICINES', 'DEMO_PHARMACIES', 'DemoDataGenerator']
