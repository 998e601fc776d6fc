# Services Module
from .models import Category, ColorVariant, Product

__all__ = ["Category", "ColorVariant", "Product"]
