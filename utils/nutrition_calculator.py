import math

from utils.errors import ValidationError


class NutritionCalculator:
    """
    Standalone nutrition targets from body type, activity and goal.

    This is the calculator behind the nutrition endpoint. The plan generator
    uses the Mifflin-St Jeor path in planner.nutrition_engine instead; the
    two give different numbers for the same person.

    References
    ----------
    - Harris-Benedict Equation, revised (Roza & Shizgal 1984)
    """

    def __init__(self):
        # ── BMR formulas ────────────────────────────────────────────────────
        self.bmr_formulas = {
            'male':   lambda W, H, A: 88.362  + (13.397 * W) + (4.799 * H) - (5.677 * A),
            'female': lambda W, H, A: 447.593 + (9.247  * W) + (3.098 * H) - (4.330 * A),
        }

        # ── Activity factors ────────────────────────────────────────────────
        self.activity_factors = {
            'sedentary':   1.2,
            'light':       1.375,
            'moderate':    1.55,
            'active':      1.725,
            'very_active': 1.9,
        }

        # ── Goal multipliers (fraction of TDEE) ─────────────────────────────
        self.goal_factors = {
            'weight_loss': 0.85,
            'maintenance': 1.0,
            'muscle_gain': 1.15,
        }

        # ── Macro split by body type: protein / carbs / fats (%) ────────────
        self.default_body_type = 'mesomorph'
        self.macro_splits = {
            'ectomorph': (25, 50, 25),
            'mesomorph': (30, 40, 30),
            'endomorph': (35, 30, 35),
        }

        # ── Meal templates per body type ────────────────────────────────────
        self.meal_templates = {
            'ectomorph': {
                'breakfast': ['Oatmeal with banana and nuts', 'Protein shake'],
                'lunch':     ['Grilled chicken with rice', 'Vegetables'],
                'dinner':    ['Salmon with sweet potato', 'Green salad'],
                'snacks':    ['Greek yogurt', 'Handful of almonds'],
            },
            'mesomorph': {
                'breakfast': ['Scrambled eggs with whole wheat toast', 'Avocado'],
                'lunch':     ['Lean beef with quinoa', 'Steamed vegetables'],
                'dinner':    ['Grilled fish with brown rice', 'Roasted veggies'],
                'snacks':    ['Cottage cheese', 'Protein bar'],
            },
            'endomorph': {
                'breakfast': ['Vegetable omelette', 'Small portion of berries'],
                'lunch':     ['Grilled chicken salad with olive oil', 'Quinoa'],
                'dinner':    ['Lean protein with steamed vegetables', 'Small portion of healthy fats'],
                'snacks':    ['Handful of nuts', 'Protein shake'],
            },
        }

        # (time, name, share of daily calories)
        self.meal_times = [
            ('Breakfast', 'Energizing Start', 0.3),
            ('Lunch',     'Balanced Meal',    0.3),
            ('Dinner',    'Light Finish',     0.3),
            ('Snacks',    'Nutrition Boost',  0.1),
        ]

        # ── Tips ────────────────────────────────────────────────────────────
        self._body_type_tips = {
            'ectomorph': [
                'Focus on calorie-dense foods to meet your high energy needs',
                'Include healthy fats like nuts, seeds, and avocados',
                'Eat frequent meals to maintain energy levels',
                'Combine proteins with carbs for optimal muscle recovery',
            ],
            'mesomorph': [
                'Maintain balanced macronutrients for your versatile metabolism',
                'Time your carbs around workouts for energy and recovery',
                'Keep protein intake consistent throughout the day',
                'Vary your workouts to continue seeing progress',
            ],
            'endomorph': [
                'Focus on portion control and meal timing',
                'Choose complex carbs over simple sugars',
                'Include plenty of fiber to help with satiety',
                'Consider intermittent fasting if it suits your lifestyle',
            ],
        }
        self._goal_tips = {
            'weight_loss': [
                'Create a moderate calorie deficit (300-500 kcal)',
                'Prioritize protein to preserve muscle mass',
                'Stay hydrated to support metabolism',
                'Include strength training to maintain muscle',
            ],
            'maintenance': [
                'Monitor your weight and adjust as needed',
                'Maintain consistent eating patterns',
                'Focus on food quality for optimal health',
                'Stay active to support your metabolism',
            ],
            'muscle_gain': [
                'Ensure adequate protein intake (1.6-2.2g per kg of body weight)',
                'Time your nutrition around workouts',
                'Progressively increase calories as you gain',
                'Prioritize recovery with quality sleep',
            ],
        }

    # ── Core calculation helpers ─────────────────────────────────────────

    @staticmethod
    def _round(value: float) -> int:
        return int(math.floor(value + 0.5))

    def _body_type_key(self, body_type: str) -> str:
        key = body_type.strip().lower()
        return key if key in self.macro_splits else self.default_body_type

    def calculate_bmr(self, weight_kg: float, height_cm: float,
                      age: int, gender: str) -> float:
        key = 'male' if gender.strip().lower() == 'male' else 'female'
        return self.bmr_formulas[key](weight_kg, height_cm, age)

    def calculate_tdee(self, bmr: float, activity_level: str) -> float:
        factor = self.activity_factors.get(activity_level)
        if factor is None:
            raise ValidationError('Invalid activity level', [
                f'activityLevel must be one of: {", ".join(self.activity_factors)}'
            ])
        return bmr * factor

    def calculate_calorie_target(self, tdee: float, goal: str) -> float:
        factor = self.goal_factors.get(goal)
        if factor is None:
            raise ValidationError('Invalid goal', [
                f'goals must be one of: {", ".join(self.goal_factors)}'
            ])
        return tdee * factor

    def macro_split(self, body_type: str) -> tuple:
        return self.macro_splits[self._body_type_key(body_type)]

    def calculate_macro_grams(self, calories: float, body_type: str) -> dict:
        protein_pct, carbs_pct, fats_pct = self.macro_split(body_type)
        return {
            'protein': self._round(calories * protein_pct / 100 / 4),   # 4 kcal / g
            'carbs':   self._round(calories * carbs_pct / 100 / 4),
            'fats':    self._round(calories * fats_pct / 100 / 9),      # 9 kcal / g
        }

    def generate_meal_plan(self, body_type: str, calories: float) -> list:
        template = self.meal_templates[self._body_type_key(body_type)]
        return [
            {
                'time':     time,
                'name':     name,
                'items':    list(template[time.lower()]),
                'calories': self._round(calories * share),
            }
            for time, name, share in self.meal_times
        ]

    def generate_tips(self, body_type: str, goal: str) -> list:
        return [
            *self._body_type_tips[self._body_type_key(body_type)],
            *self._goal_tips.get(goal, []),
        ]

    # ── Main public API ──────────────────────────────────────────────────

    def get_nutrition_plan(
        self,
        age: int,
        weight_kg: float,
        height_cm: float,
        body_type: str,
        activity_level: str,
        gender: str,
        goal: str,
    ) -> dict:
        """
        Return calorie and macro targets plus a meal outline and tips.

        Parameters
        ----------
        age            : age in years
        weight_kg      : body weight in kg
        height_cm      : height in cm
        body_type      : ectomorph / mesomorph / endomorph (others use mesomorph)
        activity_level : one of sedentary / light / moderate / active / very_active
        gender         : 'male', anything else uses the female formula
        goal           : weight_loss / maintenance / muscle_gain

        Raises
        ------
        ValidationError for an unknown activity level or goal.
        """
        bmr      = self.calculate_bmr(weight_kg, height_cm, age, gender)
        tdee     = self.calculate_tdee(bmr, activity_level)
        calories = self.calculate_calorie_target(tdee, goal)
        grams    = self.calculate_macro_grams(calories, body_type)
        protein_pct, carbs_pct, fats_pct = self.macro_split(body_type)

        return {
            'calories':          self._round(calories),
            'protein':           grams['protein'],
            'proteinPercentage': protein_pct,
            'carbs':             grams['carbs'],
            'carbsPercentage':   carbs_pct,
            'fats':              grams['fats'],
            'fatsPercentage':    fats_pct,
            'meals':             self.generate_meal_plan(body_type, calories),
            'tips':              self.generate_tips(body_type, goal),
        }
