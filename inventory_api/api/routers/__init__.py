from . import products
