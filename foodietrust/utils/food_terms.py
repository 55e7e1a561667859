"""
Food vocabulary: single source of truth for the query filter and the crawlers.
"""

# Dish names the crawlers look for in review text (substring match, this order)
CRAWL_DISH_VOCABULARY = [
    "biryani", "dosa", "idli", "parotta", "chicken", "mutton", "prawn",
    "fish", "paneer", "samosa", "sambar", "rasam", "pongal", "halwa",
]

# Words that mark a query as travel / non-food; checked before anything else
NON_FOOD_KEYWORDS = frozenset({
    "hotel", "hotels", "motel", "hostel", "lodging", "resort",
    "flight", "flights", "airline", "airlines", "airport",
    "train", "trains", "railway", "bus", "taxi", "cab", "uber",
    "visa", "passport", "rental", "apartment", "apartments",
    "weather", "movie", "movies", "cinema",
})

FOOD_KEYWORDS = frozenset({
    # generic
    "food", "foods", "eat", "eating", "eats", "restaurant", "restaurants",
    "cafe", "cafes", "dhaba", "mess", "canteen", "bakery", "bar", "pub",
    "dish", "dishes", "menu", "meal", "meals", "lunch", "dinner", "breakfast",
    "brunch", "snack", "snacks", "dessert", "desserts", "cuisine", "hungry",
    "veg", "vegetarian", "vegan", "spicy", "tasty", "delicious", "takeaway",
    "delivery", "buffet", "thali", "street",
    # cuisines
    "indian", "chinese", "italian", "mexican", "thai", "japanese", "korean",
    "continental", "mughlai", "chettinad", "kerala", "andhra", "punjabi",
    "udupi", "seafood", "bbq", "barbecue",
    # dishes and ingredients
    "biryani", "dosa", "idli", "vada", "parotta", "chicken", "mutton", "prawn",
    "prawns", "fish", "paneer", "samosa", "sambar", "rasam", "pongal", "halwa",
    "curry", "tikka", "naan", "roti", "kebab", "kebabs", "shawarma", "momos",
    "noodles", "pizza", "pasta", "burger", "burgers", "sandwich", "fries",
    "sushi", "ramen", "tacos", "burrito", "steak", "salad", "soup", "rice",
    "egg", "eggs", "chaat", "pani", "puri", "bhel", "pav", "bhaji",
    "coffee", "tea", "chai", "juice", "lassi", "shake", "milkshake",
    "cake", "cakes", "ice", "cream", "kulfi", "chocolate", "sweets",
})

# Words that can follow "at"/"in" without naming a place ("dosa at home")
NON_PLACE_WORDS = frozenset({
    "home", "my place", "work", "office", "night", "midnight", "noon",
    "lunch", "dinner", "breakfast", "brunch", "lunchtime", "dinnertime",
    "the morning", "the evening", "the afternoon", "the weekend", "once",
})
