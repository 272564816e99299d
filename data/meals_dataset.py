"""Default meals stored by `database.init_db` into an empty datastore."""

MEALS_DATA = [
    {"id": 1, "title": "Fried potato", "description": "Fried potato with mushrooms and onion.", "ingredients": ["potato", "onion", "oil"], "type": "Main"},
    {"id": 2, "title": "Chocolate cake", "description": "Chocolate cake with butter cream and strawberry.", "ingredients": ["flour", "water", "butter", "strawberry"], "type": "Dessert"},
    {"id": 3, "title": "Vegetable soup", "description": "Vegetable soup with onion.", "ingredients": ["potato", "onion"], "type": "Soup"},
    {"id": 4, "title": "Greek salad", "description": "Tomatoes, cucumber and feta with olive oil.", "ingredients": ["tomato", "cucumber", "feta", "olive oil", "olives"], "type": "Salad"},
    {"id": 5, "title": "Pancakes", "description": "Thin pancakes with honey.", "ingredients": ["flour", "milk", "egg", "honey"], "type": "Breakfast"},
]
