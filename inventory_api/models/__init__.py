# Masters
from inventory_api.models.masters.attribute_models import Attribute
from inventory_api.models.masters.product_models import Product, ProductVariant

# Inventory
from inventory_api.models.inventory.movement_models import Movement
