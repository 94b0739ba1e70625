from .solar import SolarCalculator, UDP_MARGIN

__all__ = ['SolarCalculator', 'UDP_MARGIN']
