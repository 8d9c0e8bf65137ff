"""Fixed starter catalog written locally and remotely when the remote catalog is empty."""

from decimal import Decimal

from mercado.storage.models import Category, Difficulty, Recipe

_SEED = [
    {
        "id": 1,
        "name": "Ensalada de Quinoa con Verduras",
        "description": "Ensalada nutritiva y balanceada con quinoa, vegetales frescos y aderezo ligero",
        "category": Category.LUNCH,
        "image_url": "recipe_quinoa_salad",
        "calories": 350,
        "nutrition": ("12.0", "45.0", "10.0", "8.0", "200.0", "3.0"),
        "suitable_for": ["diabetes", "hipertension", "obesidad"],
        "allergens": [],
        "ingredients": [
            "1 taza de quinoa cocida",
            "2 tomates picados",
            "1 pepino en cubos",
            "1/2 cebolla morada",
            "Jugo de 1 limón",
            "2 cdas de aceite de oliva",
            "Sal y pimienta al gusto",
        ],
        "instructions": [
            "Cocinar la quinoa según instrucciones del paquete",
            "Dejar enfriar la quinoa",
            "Picar todas las verduras en cubos pequeños",
            "Mezclar la quinoa con las verduras",
            "Agregar aceite de oliva y jugo de limón",
            "Sazonar con sal y pimienta",
            "Refrigerar por 30 minutos antes de servir",
        ],
        "preparation_time": 25,
        "difficulty": Difficulty.EASY,
        "servings": 2,
        "estimated_cost": "8.50",
        "rating": 4.5,
    },
    {
        "id": 2,
        "name": "Pollo a la Plancha con Brócoli",
        "description": "Pechuga de pollo magra acompañada de brócoli al vapor, ideal para diabéticos",
        "category": Category.LUNCH,
        "image_url": "recipe_chicken_broccoli",
        "calories": 280,
        "nutrition": ("35.0", "12.0", "8.0", "4.0", "150.0", "2.0"),
        "suitable_for": ["diabetes", "obesidad"],
        "allergens": [],
        "ingredients": [
            "200g de pechuga de pollo",
            "2 tazas de brócoli",
            "1 cda de aceite de oliva",
            "Ajo en polvo",
            "Limón",
            "Sal baja en sodio",
        ],
        "instructions": [
            "Sazonar el pollo con ajo, sal y limón",
            "Calentar una plancha o sartén",
            "Cocinar el pollo 6-7 minutos por lado",
            "Cocer el brócoli al vapor por 5 minutos",
            "Servir el pollo con el brócoli",
            "Agregar un chorrito de limón",
        ],
        "preparation_time": 20,
        "difficulty": Difficulty.EASY,
        "servings": 1,
        "estimated_cost": "9.00",
        "rating": 4.7,
    },
    {
        "id": 3,
        "name": "Avena con Frutas y Canela",
        "description": "Desayuno energético con avena integral, frutas frescas y canela",
        "category": Category.BREAKFAST,
        "image_url": "recipe_oatmeal_fruits",
        "calories": 320,
        "nutrition": ("10.0", "55.0", "7.0", "9.0", "50.0", "12.0"),
        "suitable_for": ["diabetes", "hipertension", "obesidad"],
        "allergens": ["lacteos"],
        "ingredients": [
            "1/2 taza de avena integral",
            "1 taza de leche descremada",
            "1 manzana verde picada",
            "1/2 plátano en rodajas",
            "Canela en polvo",
            "1 cda de semillas de chía",
        ],
        "instructions": [
            "Cocinar la avena con la leche a fuego medio",
            "Revolver constantemente por 5 minutos",
            "Agregar la canela mientras cocina",
            "Servir en un bowl",
            "Decorar con las frutas picadas",
            "Espolvorear semillas de chía por encima",
        ],
        "preparation_time": 10,
        "difficulty": Difficulty.EASY,
        "servings": 1,
        "estimated_cost": "4.50",
        "rating": 4.6,
    },
    {
        "id": 4,
        "name": "Sopa de Verduras Casera",
        "description": "Sopa nutritiva y baja en sodio con vegetales frescos de estación",
        "category": Category.DINNER,
        "image_url": "recipe_vegetable_soup",
        "calories": 150,
        "nutrition": ("5.0", "25.0", "3.0", "6.0", "180.0", "8.0"),
        "suitable_for": ["hipertension", "obesidad", "diabetes"],
        "allergens": [],
        "ingredients": [
            "2 zanahorias",
            "1 zapallo",
            "2 papas pequeñas",
            "1 poro",
            "1 rama de apio",
            "4 tazas de agua",
            "Hierbas aromáticas",
            "Sal baja en sodio",
        ],
        "instructions": [
            "Lavar y pelar todas las verduras",
            "Cortar las verduras en cubos medianos",
            "Poner el agua a hervir",
            "Agregar todas las verduras",
            "Cocinar por 25 minutos",
            "Sazonar con hierbas y sal baja en sodio",
            "Licuar parcialmente si se desea textura cremosa",
        ],
        "preparation_time": 35,
        "difficulty": Difficulty.EASY,
        "servings": 4,
        "estimated_cost": "6.00",
        "rating": 4.4,
    },
    {
        "id": 5,
        "name": "Pescado al Horno con Vegetales",
        "description": "Filete de pescado blanco horneado con vegetales mediterráneos",
        "category": Category.DINNER,
        "image_url": "recipe_baked_fish",
        "calories": 300,
        "nutrition": ("32.0", "15.0", "12.0", "4.0", "200.0", "4.0"),
        "suitable_for": ["diabetes", "hipertension", "obesidad"],
        "allergens": ["pescado"],
        "ingredients": [
            "200g de filete de pescado blanco",
            "1 pimiento rojo",
            "1 calabacín",
            "1 tomate",
            "2 cdas de aceite de oliva",
            "Limón",
            "Hierbas aromáticas",
        ],
        "instructions": [
            "Precalentar el horno a 180°C",
            "Cortar los vegetales en rodajas",
            "Colocar los vegetales en una bandeja",
            "Poner el pescado sobre los vegetales",
            "Rociar con aceite de oliva y limón",
            "Espolvorear hierbas aromáticas",
            "Hornear por 20 minutos",
        ],
        "preparation_time": 30,
        "difficulty": Difficulty.MEDIUM,
        "servings": 1,
        "estimated_cost": "12.00",
        "rating": 4.8,
    },
    {
        "id": 6,
        "name": "Batido Verde Energético",
        "description": "Batido saludable con espinaca, frutas y semillas para un desayuno rápido",
        "category": Category.BREAKFAST,
        "image_url": "recipe_green_smoothie",
        "calories": 200,
        "nutrition": ("8.0", "35.0", "4.0", "7.0", "40.0", "18.0"),
        "suitable_for": ["obesidad", "hipertension"],
        "allergens": [],
        "ingredients": [
            "1 taza de espinacas frescas",
            "1 plátano maduro",
            "1/2 manzana verde",
            "1 taza de agua",
            "1 cda de semillas de linaza",
            "Hielo al gusto",
        ],
        "instructions": [
            "Lavar bien las espinacas",
            "Pelar el plátano y cortar la manzana",
            "Colocar todos los ingredientes en la licuadora",
            "Agregar el agua y el hielo",
            "Licuar hasta obtener consistencia suave",
            "Servir inmediatamente",
        ],
        "preparation_time": 5,
        "difficulty": Difficulty.EASY,
        "servings": 1,
        "estimated_cost": "3.50",
        "rating": 4.3,
    },
    {
        "id": 7,
        "name": "Ensalada César Saludable",
        "description": "Versión saludable de la ensalada césar con aderezo de yogurt",
        "category": Category.LUNCH,
        "image_url": "recipe_caesar_salad",
        "calories": 280,
        "nutrition": ("20.0", "18.0", "14.0", "5.0", "250.0", "3.0"),
        "suitable_for": ["diabetes", "obesidad"],
        "allergens": ["lacteos", "gluten"],
        "ingredients": [
            "3 tazas de lechuga romana",
            "100g de pechuga de pollo a la plancha",
            "2 cdas de yogurt griego",
            "1 cda de jugo de limón",
            "1 cdta de mostaza Dijon",
            "Queso parmesano rallado",
            "Crotones integrales",
        ],
        "instructions": [
            "Cocinar el pollo y cortarlo en tiras",
            "Lavar y cortar la lechuga",
            "Mezclar yogurt, limón y mostaza para el aderezo",
            "Colocar la lechuga en un bowl",
            "Agregar el pollo en tiras",
            "Verter el aderezo",
            "Espolvorear queso parmesano y crotones",
        ],
        "preparation_time": 15,
        "difficulty": Difficulty.EASY,
        "servings": 2,
        "estimated_cost": "10.00",
        "rating": 4.5,
    },
    {
        "id": 8,
        "name": "Tortilla de Claras con Champiñones",
        "description": "Tortilla proteica de claras de huevo con champiñones y espinacas",
        "category": Category.BREAKFAST,
        "image_url": "recipe_egg_white_omelette",
        "calories": 180,
        "nutrition": ("18.0", "8.0", "6.0", "2.0", "220.0", "2.0"),
        "suitable_for": ["diabetes", "obesidad", "hipertension"],
        "allergens": ["huevo"],
        "ingredients": [
            "4 claras de huevo",
            "1/2 taza de champiñones laminados",
            "1 taza de espinacas frescas",
            "1 cdta de aceite de oliva",
            "Cebolla picada",
            "Sal y pimienta",
        ],
        "instructions": [
            "Batir las claras con sal y pimienta",
            "Saltear champiñones y cebolla en aceite",
            "Agregar las espinacas hasta que se marchiten",
            "Verter las claras batidas sobre los vegetales",
            "Cocinar a fuego medio por 3 minutos",
            "Doblar la tortilla y servir",
        ],
        "preparation_time": 12,
        "difficulty": Difficulty.EASY,
        "servings": 1,
        "estimated_cost": "5.00",
        "rating": 4.4,
    },
]


def seed_recipes() -> list[Recipe]:
    """Fresh Recipe instances on every call (they get attached to sessions)."""
    out = []
    for item in _SEED:
        protein, carbohydrates, fats, fiber, sodium, sugar = (Decimal(v) for v in item["nutrition"])
        out.append(
            Recipe(
                id=item["id"],
                name=item["name"],
                description=item["description"],
                category=item["category"].value,
                image_url=item["image_url"],
                calories=item["calories"],
                protein=protein,
                carbohydrates=carbohydrates,
                fats=fats,
                fiber=fiber,
                sodium=sodium,
                sugar=sugar,
                suitable_for=list(item["suitable_for"]),
                allergens=list(item["allergens"]),
                ingredients=list(item["ingredients"]),
                instructions=list(item["instructions"]),
                preparation_time=item["preparation_time"],
                difficulty=item["difficulty"].value,
                servings=item["servings"],
                estimated_cost=Decimal(item["estimated_cost"]),
                rating=item["rating"],
            )
        )
    return out


SEED_RECIPE_IDS = tuple(item["id"] for item in _SEED)
