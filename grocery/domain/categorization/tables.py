"""
Static lookup tables for deterministic grocery categorization

NO AI CALLS - Pure data.

- SYNONYMS: many-to-one name folding applied by the normalizer
- EXACT_MATCHES: whole grocery-item phrases → category (tiers 2 and 3)
- CATEGORY_KEYWORDS: generic keywords → category (tiers 4 and 5)

All tables are read-only mappings built once at import time, so they can be
shared across tasks without locking.
"""
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from grocery.common.schemas.grocery import Category


def _assign(category: Category, names: Iterable[str]) -> Iterable[Tuple[str, Category]]:
    return ((name, category) for name in names)


# Synonym targets must never be synonym keys themselves (keeps normalize idempotent)
SYNONYMS: Mapping[str, str] = MappingProxyType({
    "scallion": "green onion",
    "scallions": "green onions",
    "cilantro": "coriander",
    "spring onion": "green onion",
    "romano": "romaine",
    "roma tomato": "tomato",
    "beefsteak tomato": "tomato",
})


_PRODUCE_FRUITS = (
    "apple", "apples", "granny smith apple", "honeycrisp apple", "gala apple",
    "banana", "bananas", "plantain", "plantains",
    "orange", "oranges", "mandarin", "mandarins", "clementine", "clementines", "tangerine", "tangerines",
    "lemon", "lemons", "lime", "limes",
    "berry", "berries", "strawberry", "strawberries", "blueberry", "blueberries",
    "raspberry", "raspberries", "blackberry", "blackberries", "cranberry", "cranberries", "mixed berries",
    "grape", "grapes", "green grapes", "red grapes",
    "watermelon", "cantaloupe", "honeydew", "melon",
    "pineapple", "mango", "mangos", "mangoes",
    "peach", "peaches", "nectarine", "nectarines",
    "pear", "pears", "plum", "plums",
    "cherry", "cherries", "kiwi", "kiwis",
    "papaya", "coconut", "coconuts", "avocado", "avocados",
    "pomegranate", "pomegranates", "fig", "figs",
    "apricot", "apricots", "grapefruit", "grapefruits",
    "dragon fruit", "star fruit", "passion fruit",
    "persimmon", "persimmons", "guava",
)

_PRODUCE_VEGETABLES = (
    "lettuce", "romaine lettuce", "iceberg lettuce", "butter lettuce", "arugula", "mixed greens", "salad mix",
    "tomato", "tomatoes", "cherry tomatoes", "grape tomatoes", "roma tomatoes", "beefsteak tomato", "heirloom tomato",
    "onion", "onions", "red onion", "yellow onion", "white onion", "sweet onion", "vidalia onion",
    "green onion", "green onions", "scallion", "scallions", "spring onion", "leek", "leeks", "shallot", "shallots",
    "potato", "potatoes", "russet potato", "red potato", "yukon gold potato",
    "sweet potato", "sweet potatoes", "yam", "yams",
    "carrot", "carrots", "baby carrots",
    "cucumber", "cucumbers", "english cucumber", "persian cucumber",
    "bell pepper", "red bell pepper", "green bell pepper", "yellow bell pepper", "orange bell pepper",
    "pepper", "peppers", "jalapeño", "jalapeños", "serrano pepper", "poblano pepper", "habanero",
    "spinach", "baby spinach", "broccoli", "cauliflower",
    "garlic", "garlic cloves", "ginger", "fresh ginger", "ginger root",
    "mushroom", "mushrooms", "white mushrooms", "cremini mushrooms", "portobello mushrooms", "shiitake mushrooms",
    "celery", "kale", "zucchini", "squash", "yellow squash", "butternut squash", "acorn squash", "spaghetti squash",
    "eggplant", "cabbage", "green cabbage", "red cabbage", "napa cabbage", "bok choy",
    "asparagus", "green beans", "snap peas", "snow peas", "peas",
    "corn", "corn on the cob", "beet", "beets", "radish", "radishes",
    "brussels sprouts", "artichoke", "artichokes",
    "parsley", "cilantro", "coriander", "basil", "fresh basil", "mint", "fresh mint",
    "dill", "thyme", "rosemary",
)

_MEAT_SEAFOOD = (
    "chicken", "chicken breast", "chicken breasts", "boneless chicken breast", "chicken thighs", "chicken thigh",
    "chicken drumsticks", "chicken wings", "whole chicken", "rotisserie chicken",
    "ground beef", "beef", "steak", "ribeye", "ribeye steak", "sirloin", "sirloin steak",
    "filet mignon", "new york strip", "t-bone steak",
    "ground turkey", "turkey", "turkey breast", "deli turkey", "sliced turkey",
    "pork", "pork chops", "pork tenderloin", "pork ribs", "pork shoulder", "pulled pork",
    "bacon", "turkey bacon", "canadian bacon",
    "sausage", "sausages", "italian sausage", "breakfast sausage", "chorizo", "bratwurst", "kielbasa",
    "hot dogs", "hot dog",
    "ham", "deli ham", "prosciutto", "salami", "pepperoni", "pastrami",
    "lamb", "lamb chops", "leg of lamb",
    "salmon", "salmon fillet", "smoked salmon", "lox",
    "tuna", "tuna steak",
    "shrimp", "prawns", "scallops", "crab", "crab legs", "lobster", "lobster tail",
    "tilapia", "cod", "halibut", "mahi mahi", "sea bass", "swordfish", "trout",
    "fish", "white fish", "fish fillet",
)

_DAIRY_EGGS = (
    "milk", "whole milk", "2% milk", "skim milk", "1% milk", "fat free milk",
    "almond milk", "oat milk", "soy milk", "coconut milk", "cashew milk", "rice milk",
    "half and half", "heavy cream", "heavy whipping cream", "whipping cream", "light cream",
    "sour cream", "cream cheese", "whipped cream", "cool whip",
    "butter", "salted butter", "unsalted butter", "margarine",
    "yogurt", "greek yogurt", "plain yogurt", "vanilla yogurt", "strawberry yogurt",
    "cottage cheese", "ricotta cheese", "mascarpone",
    "cheese", "cheddar cheese", "mozzarella", "mozzarella cheese", "parmesan", "parmesan cheese",
    "swiss cheese", "american cheese", "provolone", "monterey jack",
    "feta cheese", "goat cheese", "brie", "blue cheese", "gorgonzola",
    "string cheese", "cheese sticks", "babybel", "laughing cow",
    "egg", "eggs", "brown eggs", "white eggs", "free range eggs", "organic eggs", "egg whites",
)

_BAKERY = (
    "bread", "white bread", "wheat bread", "whole wheat bread", "sourdough", "sourdough bread",
    "rye bread", "pumpernickel", "french bread", "italian bread",
    "bagel", "bagels", "plain bagel", "everything bagel", "sesame bagel",
    "roll", "rolls", "dinner rolls", "kaiser roll", "ciabatta", "ciabatta roll",
    "bun", "buns", "hamburger buns", "hot dog buns", "brioche buns",
    "tortilla", "tortillas", "flour tortillas", "corn tortillas", "wrap", "wraps",
    "pita", "pita bread", "naan", "flatbread",
    "croissant", "croissants", "muffin", "muffins", "blueberry muffin", "bran muffin",
    "donut", "donuts", "doughnuts", "danish", "cinnamon roll", "cinnamon rolls",
    "cake", "cupcake", "cupcakes", "pie", "cookie", "cookies",
)

_PANTRY = (
    "canned tuna", "tuna can",
    "rice", "white rice", "brown rice", "jasmine rice", "basmati rice", "arborio rice", "wild rice",
    "pasta", "spaghetti", "penne", "fettuccine", "linguine", "rigatoni", "macaroni", "elbow macaroni",
    "mac and cheese", "macaroni and cheese", "kraft dinner", "boxed mac and cheese",
    "noodles", "egg noodles", "ramen", "ramen noodles", "instant noodles", "rice noodles", "pad thai noodles",
    "flour", "all purpose flour", "bread flour", "cake flour", "whole wheat flour",
    "sugar", "white sugar", "granulated sugar", "brown sugar", "powdered sugar", "confectioners sugar", "cane sugar",
    "oil", "olive oil", "vegetable oil", "canola oil", "coconut oil", "sesame oil", "avocado oil",
    "cooking spray", "pam",
    "salt", "table salt", "sea salt", "kosher salt", "himalayan salt",
    "black pepper", "ground black pepper", "white pepper", "peppercorn",
    "cereal", "cheerios", "corn flakes", "frosted flakes", "fruit loops", "rice krispies",
    "oatmeal", "oats", "rolled oats", "quick oats", "instant oatmeal",
    "granola", "granola bar", "granola bars",
    "beans", "black beans", "kidney beans", "pinto beans", "chickpeas", "garbanzo beans", "lentils", "split peas",
    "canned beans", "refried beans", "baked beans",
    "quinoa", "couscous", "bulgur", "barley", "farro",
    "tomato sauce", "marinara sauce", "pasta sauce", "spaghetti sauce", "alfredo sauce",
    "ketchup", "mustard", "yellow mustard", "dijon mustard", "mayo", "mayonnaise", "miracle whip",
    "hot sauce", "sriracha", "tabasco", "bbq sauce", "barbecue sauce",
    "soy sauce", "teriyaki sauce", "worcestershire sauce", "fish sauce", "oyster sauce", "hoisin sauce",
    "salsa", "pico de gallo", "guacamole", "hummus",
    "peanut butter", "almond butter", "nutella", "jam", "jelly", "preserves", "strawberry jam", "grape jelly",
    "honey", "maple syrup", "agave", "agave nectar", "molasses",
    "vinegar", "white vinegar", "apple cider vinegar", "balsamic vinegar", "red wine vinegar", "rice vinegar",
    "canned tomatoes", "diced tomatoes", "crushed tomatoes", "tomato paste", "tomato soup",
    "chicken broth", "beef broth", "vegetable broth", "chicken stock", "beef stock", "vegetable stock",
    "soup", "canned soup", "campbell's soup",
    "crackers", "saltines", "ritz crackers", "graham crackers", "goldfish",
    "chips", "potato chips", "lays", "doritos", "tortilla chips", "pringles", "cheetos",
    "popcorn", "microwave popcorn", "pretzels",
    "nuts", "peanuts", "almonds", "cashews", "walnuts", "pecans", "pistachios", "mixed nuts",
    "baking powder", "baking soda", "yeast", "vanilla extract", "vanilla", "almond extract",
    "chocolate chips", "cocoa powder", "cornstarch", "corn meal",
    "cinnamon", "paprika", "cumin", "dried oregano", "dried basil", "garlic powder", "onion powder",
    "chili powder", "cayenne pepper", "red pepper flakes",
    "italian seasoning", "taco seasoning", "ranch seasoning",
)

_FROZEN = (
    "ice cream", "vanilla ice cream", "chocolate ice cream", "strawberry ice cream", "gelato", "sorbet", "sherbet",
    "frozen pizza", "frozen vegetables", "frozen fruit", "frozen berries", "frozen broccoli", "frozen peas", "frozen corn",
    "popsicle", "popsicles", "ice pops", "frozen yogurt",
    "frozen dinner", "tv dinner", "lean cuisine", "hungry man",
    "frozen french fries", "french fries", "fries", "tater tots", "hash browns",
    "frozen chicken nuggets", "chicken nuggets", "frozen fish sticks", "fish sticks",
    "frozen waffles", "eggo waffles", "frozen pancakes",
    "ice", "ice cubes", "bag of ice",
)

_BEVERAGES = (
    "water", "bottled water", "sparkling water", "seltzer", "la croix", "perrier", "san pellegrino",
    "orange juice", "oj", "apple juice", "grape juice", "cranberry juice", "grapefruit juice", "pineapple juice",
    "juice", "fruit juice", "lemonade", "limeade",
    "soda", "pop", "coke", "coca cola", "pepsi", "sprite", "7up", "mountain dew", "dr pepper",
    "root beer", "ginger ale",
    "diet coke", "diet pepsi", "coke zero",
    "iced tea", "sweet tea", "unsweetened tea", "arizona tea", "snapple",
    "energy drink", "red bull", "monster", "gatorade", "powerade",
    "coffee", "ground coffee", "coffee beans", "instant coffee", "espresso", "k cups", "coffee pods",
    "tea", "tea bags", "green tea", "black tea", "herbal tea", "chamomile tea",
    "hot chocolate", "cocoa", "chocolate milk",
    "beer", "wine", "red wine", "white wine", "champagne", "prosecco",
    "vodka", "gin", "rum", "tequila", "whiskey", "bourbon",
)

_HOUSEHOLD = (
    "paper towel", "paper towels", "bounty",
    "toilet paper", "tp", "charmin",
    "napkins", "paper napkins",
    "trash bag", "trash bags", "garbage bags", "kitchen bags", "hefty bags", "glad bags",
    "dish soap", "dishwashing liquid", "dawn",
    "hand soap", "bar soap", "body wash", "dove soap",
    "laundry detergent", "tide", "gain", "fabric softener", "dryer sheets", "bounce",
    "bleach", "clorox", "disinfectant", "lysol",
    "cleaning spray", "all purpose cleaner", "windex", "glass cleaner",
    "sponge", "sponges", "scrub brush",
    "aluminum foil", "foil", "plastic wrap", "saran wrap", "cling wrap",
    "ziploc bags", "sandwich bags", "storage bags", "freezer bags",
    "parchment paper", "wax paper",
    "batteries", "aa batteries", "aaa batteries", "light bulbs",
)


EXACT_MATCHES: Mapping[str, Category] = MappingProxyType(dict((
    *_assign(Category.PRODUCE, _PRODUCE_FRUITS),
    *_assign(Category.PRODUCE, _PRODUCE_VEGETABLES),
    *_assign(Category.MEAT, _MEAT_SEAFOOD),
    *_assign(Category.DAIRY, _DAIRY_EGGS),
    *_assign(Category.BAKERY, _BAKERY),
    *_assign(Category.PANTRY, _PANTRY),
    *_assign(Category.FROZEN, _FROZEN),
    *_assign(Category.BEVERAGES, _BEVERAGES),
    *_assign(Category.HOUSEHOLD, _HOUSEHOLD),
)))


# Order matters only between keywords of equal length (first listed wins)
CATEGORY_KEYWORDS: Mapping[str, Category] = MappingProxyType(dict((
    # Fruits
    *_assign(Category.PRODUCE, (
        "apple", "banana", "orange", "lemon", "lime",
        "strawberry", "blueberry", "raspberry", "blackberry",
        "grape", "watermelon", "melon", "pineapple",
        "mango", "peach", "pear", "plum", "cherry",
        "kiwi", "papaya", "coconut", "avocado",
    )),
    # Vegetables
    *_assign(Category.PRODUCE, (
        "lettuce", "tomato", "onion", "potato",
        "carrot", "cucumber", "bell pepper", "pepper",
        "spinach", "broccoli", "garlic", "ginger",
        "mushroom", "celery", "kale", "zucchini",
        "eggplant", "squash", "cabbage", "cauliflower",
    )),
    *_assign(Category.BAKERY, (
        "bread", "bagel", "roll", "bun",
        "croissant", "muffin", "donut", "tortilla",
    )),
    *_assign(Category.MEAT, (
        "chicken", "beef", "pork", "turkey",
        "salmon", "fish", "shrimp", "bacon",
        "sausage", "ground", "steak", "lamb",
    )),
    *_assign(Category.DAIRY, (
        "milk", "yogurt", "butter",
        "cream", "egg", "eggs",
    )),
    *_assign(Category.PANTRY, (
        "rice", "pasta", "noodle", "macaroni",
        "flour", "sugar", "oil", "salt",
        "cereal", "oats", "beans",
        "sauce", "vinegar", "spice", "can", "canned",
    )),
    *_assign(Category.FROZEN, ("frozen",)),
    *_assign(Category.BEVERAGES, (
        "water", "juice", "soda", "beer",
        "wine", "coffee", "tea",
    )),
    *_assign(Category.HOUSEHOLD, (
        "soap", "detergent", "cleaner",
        "sponge", "bleach",
    )),
)))
