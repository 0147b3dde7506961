from wishshare.models.user import User
from wishshare.models.wishlist import Wishlist
from wishshare.models.item import Item
from wishshare.models.collaborator import Collaborator

__all__ = ["User", "Wishlist", "Item", "Collaborator"]
