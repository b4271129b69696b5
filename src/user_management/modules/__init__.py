from .user_store import SeedUser, UserStore
