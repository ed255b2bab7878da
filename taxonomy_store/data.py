"""
Shaolin Wing Chun reference dataset.

Plain data only: ten ranks (LV1 to LV10), per-level requirements with one
value per demographic category, and the curriculum. ``load_default_dataset``
validates it into a TaxonomyDataset.
"""

from .handlers import validate_dataset
from .models import TaxonomyDataset

ALL_CATEGORIES = ['Junior', 'Teen', 'Adult', 'Senior']
NO_SENIOR = ['Junior', 'Teen', 'Adult']
TEEN_ADULT = ['Teen', 'Adult']


def _per_category(junior, teen, adult, senior):
    return {'Junior': junior, 'Teen': teen, 'Adult': adult, 'Senior': senior}


WING_CHUN = {
    'program_id': 'shaolin_wing_chun',
    'name': 'Shaolin Wing Chun',
    'style': 'Wing Chun Kung Fu',
    'lineage': 'Ip Man > Shaolin Heritage',
    'version': '1.0.0',

    'ranks': [
        {'level': 1, 'code': 'LV1', 'name': 'White', 'color': '#FFFFFF',
         'description': 'Beginner: Foundation', 'months_minimum': 2, 'months_maximum': 3},
        {'level': 2, 'code': 'LV2', 'name': 'White/Yellow', 'color': '#F5F5DC',
         'description': 'Transitional: Building Foundation', 'months_minimum': 2, 'months_maximum': 4},
        {'level': 3, 'code': 'LV3', 'name': 'Yellow', 'color': '#FFD700',
         'description': 'Early Intermediate: First Form Mastery', 'months_minimum': 3, 'months_maximum': 5},
        {'level': 4, 'code': 'LV4', 'name': 'Orange/White', 'color': '#FFA500',
         'description': 'Transitional: Bridge Building', 'months_minimum': 4, 'months_maximum': 6},
        {'level': 5, 'code': 'LV5', 'name': 'Orange', 'color': '#FF8C00',
         'description': 'Intermediate: Advanced Techniques', 'months_minimum': 5, 'months_maximum': 8},
        {'level': 6, 'code': 'LV6', 'name': 'Blue', 'color': '#4169E1',
         'description': 'Upper Intermediate: Second Form', 'months_minimum': 6, 'months_maximum': 10},
        {'level': 7, 'code': 'LV7', 'name': 'Purple', 'color': '#9370DB',
         'description': 'Advanced: Wooden Dummy Mastery', 'months_minimum': 8, 'months_maximum': 12},
        {'level': 8, 'code': 'LV8', 'name': 'Green', 'color': '#228B22',
         'description': 'Expert: Advanced Applications', 'months_minimum': 10, 'months_maximum': 15},
        {'level': 9, 'code': 'LV9', 'name': 'Brown', 'color': '#8B4513',
         'description': 'Senior Expert: Teaching & Weapons', 'months_minimum': 12, 'months_maximum': 18},
        {'level': 10, 'code': 'LV10', 'name': 'Black (1st Dan)', 'color': '#000000',
         'description': 'Master: Full Mastery & Leadership', 'months_minimum': 18, 'months_maximum': 24},
    ],

    'requirements': {
        1: {
            'techniques': [
                'Horse Stance (Ma Bow)', 'Bow Stance (Gong Bow)', 'High Block (Upper Hou Sau)',
                'Middle Block (Middle Gaun Sau)', 'Low Block (Lower Hou Sau)',
                'Introduction to Siu Nim Tao Form',
            ],
            'attendance': _per_category(4, 3, 2, 3),
            'time_in_rank': _per_category(2, 2, 1, 3),
            'teaching_hours': _per_category(0, 0, 0, 0),
            'sparring': False,
            'sparring_minutes': _per_category(0, 0, 0, 0),
            'weapons': False,
            'essay': True,
            'essay_prompt': _per_category(
                'Why I want to learn Wing Chun',
                'Wing Chun foundation: What makes it special?',
                'What brings you to Wing Chun?',
                'My journey to martial arts',
            ),
        },
        2: {
            'techniques': [
                'Jab Punch (Jing Quan)', 'Vertical Punch (Chuen Quan)', 'Palm Strike (Chang Geuk)',
                'Simple Combinations', 'Siu Nim Tao (Level 1)', 'Chi Sau Foundation',
            ],
            'attendance': _per_category(8, 6, 4, 6),
            'time_in_rank': _per_category(2, 2, 1, 3),
            'teaching_hours': _per_category(0, 0, 0, 0),
            'sparring': False,
            'sparring_minutes': _per_category(0, 0, 0, 0),
            'weapons': False,
            'essay': True,
            'essay_prompt': _per_category(
                'My favorite technique and why',
                'How punching works in Wing Chun',
                'Understanding structure vs. strength',
                'The importance of form and precision',
            ),
        },
        3: {
            'techniques': [
                'Siu Nim Tao (Level 2 Complete)', 'Chi Sau (Passive, 1 min)', 'Intermediate Blocks',
                'Hand Traps (Gum Sau)', 'Basic Footwork', 'Light partner work',
            ],
            'attendance': _per_category(12, 10, 8, 10),
            'time_in_rank': _per_category(3, 3, 2, 4),
            'teaching_hours': _per_category(0, 0, 0, 0),
            'sparring': False,
            'sparring_minutes': _per_category(0, 0, 0, 0),
            'weapons': False,
            'essay': True,
            'essay_prompt': _per_category(
                'How blocking helps defense',
                'The three forms of Wing Chun',
                'Chi Sau: Sensitivity and structure',
                'Learning through repetition',
            ),
        },
        4: {
            'techniques': [
                'Chi Sau (Controlled, 2 min)', 'Chum Kiu Form Introduction', 'Kick Blocks (Teuk Gaun)',
                'Stepping Techniques', 'Light sparring introduction', 'Hand trap combinations',
            ],
            'attendance': _per_category(16, 14, 12, 14),
            'time_in_rank': _per_category(4, 4, 3, 5),
            'teaching_hours': _per_category(0, 0, 0, 0),
            'sparring': True,
            'sparring_minutes': _per_category(1, 3, 5, 0),
            'weapons': False,
            'essay': True,
            'essay_prompt': _per_category(
                'Wing Chun philosophy: Why is patience important?',
                'How does Chi Sau prepare us for real combat?',
                'Analyzing footwork in real-world application',
                'What does Wing Chun teach us about aging gracefully?',
            ),
        },
        5: {
            'techniques': [
                'Chum Kiu (Level 1)', 'Active Chi Sau (3 min)', 'Intermediate Sparring',
                'Wooden Dummy Basics', 'Footwork Patterns', 'Hand traps mastery',
            ],
            'attendance': _per_category(20, 18, 16, 18),
            'time_in_rank': _per_category(5, 5, 4, 6),
            'teaching_hours': _per_category(0, 0, 0, 0),
            'sparring': True,
            'sparring_minutes': _per_category(3, 5, 8, 0),
            'weapons': False,
            'essay': True,
            'essay_prompt': _per_category(
                'How does footwork connect everything?',
                'Analyze a weakness in your sparring',
                'How does structure defeat strength?',
                'My personal health journey with martial arts',
            ),
        },
        6: {
            'techniques': [
                'Chum Kiu (Full Form)', 'Biu Jee Introduction', 'Chi Sau Mastery',
                'Wooden Dummy (Sections 1-3)', 'Advanced Sparring Techniques', 'Footwork with applications',
            ],
            'attendance': _per_category(28, 24, 20, 24),
            'time_in_rank': _per_category(6, 6, 5, 8),
            'teaching_hours': _per_category(0, 4, 8, 4),
            'sparring': True,
            'sparring_minutes': _per_category(5, 8, 10, 0),
            'weapons': False,
            'essay': True,
            'essay_prompt': _per_category(
                'Wing Chun and other martial arts',
                'The difference between power and structure',
                'Teaching methodology: Breaking down techniques',
                'How to live the Wing Chun philosophy daily',
            ),
        },
        7: {
            'techniques': [
                'Biu Jee (Level 1)', 'Butterfly Knife Introduction', 'Wooden Dummy (Complete Set)',
                'Chi Sau at high levels', 'Competition-level Sparring', 'Strategic Applications',
            ],
            'attendance': _per_category(36, 30, 24, 28),
            'time_in_rank': _per_category(8, 8, 7, 10),
            'teaching_hours': _per_category(4, 8, 10, 6),
            'sparring': True,
            'sparring_minutes': _per_category(8, 10, 12, 0),
            'weapons': True,
            'weapons_skill': 'Butterfly Knives (Basic Forms)',
            'essay': True,
            'essay_prompt': _per_category(
                'How would you teach a beginner?',
                'Compare Wing Chun techniques across forms',
                'Building a sustainable martial arts business',
                'Wisdom to pass down: Martial arts and life lessons',
            ),
        },
        8: {
            'techniques': [
                'Biu Jee (Full Form)', 'Butterfly Knives (Forms)', 'Long Pole Introduction',
                'All Chi Sau Variations', 'Tournament-level Sparring', 'Emergency Response Applications',
            ],
            'attendance': _per_category(48, 42, 32, 32),
            'time_in_rank': _per_category(10, 10, 9, 12),
            'teaching_hours': _per_category(8, 16, 20, 12),
            'sparring': True,
            'sparring_minutes': _per_category(10, 15, 15, 0),
            'weapons': True,
            'weapons_skill': 'Butterfly Knives (Full Forms) & Long Pole (Basics)',
            'essay': True,
            'essay_prompt': _per_category(
                'Advanced Wing Chun applications',
                'Leading by example in training',
                'Advanced applications of Biu Jee principles',
                'Teaching the next generation',
            ),
        },
        9: {
            'techniques': [
                'All Three Forms Mastery', 'Butterfly Knives (Full)', 'Long Pole (Full Form)',
                'Advanced Chi Sau Combinations', 'Tournament wins (2+)', 'Curriculum Development',
            ],
            'attendance': _per_category(60, 54, 40, 40),
            'time_in_rank': _per_category(12, 12, 12, 14),
            'teaching_hours': _per_category(16, 32, 40, 20),
            'sparring': True,
            'sparring_minutes': _per_category(15, 20, 20, 0),
            'weapons': True,
            'weapons_skill': 'All Weapons Mastery',
            'tournament_wins': 2,
            'essay': True,
            'essay_prompt': _per_category(
                'My Wing Chun journey so far',
                'How to create an effective training program',
                'Your philosophy of Wing Chun and legacy',
                'Passing knowledge to younger generations',
            ),
        },
        10: {
            'techniques': [
                'Complete System Mastery', 'All Forms at Master Level', 'All Weapons at Expert Level',
                'Advanced Applications Library', 'Tournament Competition (3+)', 'Sifu-Level Understanding',
            ],
            'attendance': _per_category(100, 100, 80, 60),
            'time_in_rank': _per_category(18, 18, 18, 18),
            'teaching_hours': _per_category(32, 64, 80, 40),
            'sparring': True,
            'sparring_minutes': _per_category(20, 25, 25, 0),
            'weapons': True,
            'weapons_skill': 'Complete Weapon Systems Mastery',
            'tournament_wins': 3,
            'curriculum_dev': True,
            'essay': True,
            'essay_prompt': _per_category(
                'What does it mean to be a Black Belt?',
                'My vision for Wing Chun',
                'Thesis: Wing Chun Philosophy and Practice',
                'Legacy and Wisdom',
            ),
        },
    },

    'curriculum': [
        # Stances
        {'curriculum_id': 'horse_stance', 'name': 'Horse Stance (Ma Bow)', 'category': 'Stances',
         'technique': 'Stance', 'difficulty': 'Beginner', 'minimum_level': 1,
         'applicable_categories': ALL_CATEGORIES, 'description': 'The foundational stable stance in Wing Chun'},
        {'curriculum_id': 'bow_stance', 'name': 'Bow Stance (Gong Bow)', 'category': 'Stances',
         'technique': 'Stance', 'difficulty': 'Beginner', 'minimum_level': 1,
         'applicable_categories': ALL_CATEGORIES, 'description': 'Forward-facing stance for movement and power'},

        # Defensive
        {'curriculum_id': 'high_block', 'name': 'High Block (Upper Hou Sau)', 'category': 'Defensive Techniques',
         'technique': 'Block', 'difficulty': 'Beginner', 'minimum_level': 1,
         'applicable_categories': ALL_CATEGORIES, 'description': 'Blocks for high-level attacks'},
        {'curriculum_id': 'gaun_sau', 'name': 'Centerline Block (Gaun Sau)', 'category': 'Defensive Techniques',
         'technique': 'Block', 'difficulty': 'Beginner', 'minimum_level': 1,
         'applicable_categories': ALL_CATEGORIES, 'description': 'Middle block protecting the centerline'},
        {'curriculum_id': 'low_block', 'name': 'Low Block (Lower Hou Sau)', 'category': 'Defensive Techniques',
         'technique': 'Block', 'difficulty': 'Beginner', 'minimum_level': 1,
         'applicable_categories': ALL_CATEGORIES, 'description': 'Blocks for low-level attacks and kicks'},

        # Strikes
        {'curriculum_id': 'jing_quan', 'name': 'Jab Punch (Jing Quan)', 'category': 'Striking Techniques',
         'technique': 'Punch', 'difficulty': 'Beginner', 'minimum_level': 2,
         'applicable_categories': NO_SENIOR, 'description': 'Quick straight punch from ready position'},
        {'curriculum_id': 'chuen_quan', 'name': 'Vertical Punch (Chuen Quan)', 'category': 'Striking Techniques',
         'technique': 'Punch', 'difficulty': 'Beginner', 'minimum_level': 2,
         'applicable_categories': NO_SENIOR, 'description': 'Punch with palm facing inward for power'},
        {'curriculum_id': 'palm_strike', 'name': 'Palm Strike (Chang Geuk)', 'category': 'Striking Techniques',
         'technique': 'Strike', 'difficulty': 'Beginner', 'minimum_level': 2,
         'applicable_categories': ALL_CATEGORIES, 'description': 'Strike using open palm for broad impact'},

        # Forms
        {'curriculum_id': 'siu_nim_tao', 'name': 'Siu Nim Tao (Little Idea Form)', 'category': 'Forms',
         'technique': 'Form', 'difficulty': 'Beginner', 'minimum_level': 1,
         'applicable_categories': ALL_CATEGORIES,
         'description': 'The fundamental form teaching all basic techniques', 'duration_minutes': 5},
        {'curriculum_id': 'chum_kiu', 'name': 'Chum Kiu (Bridging the Gap Form)', 'category': 'Forms',
         'technique': 'Form', 'difficulty': 'Intermediate', 'minimum_level': 4,
         'applicable_categories': NO_SENIOR,
         'description': 'Bridges the gap between solo form and partner work', 'duration_minutes': 7},
        {'curriculum_id': 'biu_jee', 'name': 'Biu Jee (Thrusting Fingers Form)', 'category': 'Forms',
         'technique': 'Form', 'difficulty': 'Advanced', 'minimum_level': 6,
         'applicable_categories': TEEN_ADULT,
         'description': 'Emergency recovery techniques and thrusting applications', 'duration_minutes': 8},

        # Partner drills
        {'curriculum_id': 'chi_sau', 'name': 'Chi Sau (Sticky Hands)', 'category': 'Partner Drills',
         'technique': 'Partner Drill', 'difficulty': 'Intermediate', 'minimum_level': 2,
         'applicable_categories': NO_SENIOR, 'description': 'Sensitivity and reflexive training with a partner'},
        {'curriculum_id': 'hand_traps', 'name': 'Hand Traps (Gum Sau)', 'category': 'Partner Drills',
         'technique': 'Partner Drill', 'difficulty': 'Intermediate', 'minimum_level': 4,
         'applicable_categories': NO_SENIOR,
         'description': "Control opponent's hands while launching counterattacks"},

        # Equipment
        {'curriculum_id': 'wooden_dummy', 'name': 'Wooden Dummy (Muk Yan Jong)', 'category': 'Equipment Drills',
         'technique': 'Equipment Drill', 'difficulty': 'Intermediate', 'minimum_level': 5,
         'applicable_categories': NO_SENIOR,
         'description': 'Practice techniques against the traditional wooden dummy'},

        # Weapons
        {'curriculum_id': 'butterfly_knives', 'name': 'Butterfly Knives (Baat Jaam Dao)', 'category': 'Weapons',
         'technique': 'Weapon', 'difficulty': 'Advanced', 'minimum_level': 7,
         'applicable_categories': TEEN_ADULT, 'description': 'Double knife forms and applications'},
        {'curriculum_id': 'long_pole', 'name': 'Long Pole (Luk Dim Boon Gwun)', 'category': 'Weapons',
         'technique': 'Weapon', 'difficulty': 'Advanced', 'minimum_level': 8,
         'applicable_categories': TEEN_ADULT, 'description': 'Staff techniques and advanced applications'},
    ],
}


def load_default_dataset() -> TaxonomyDataset:
    """Validate and return the bundled Wing Chun dataset."""
    return validate_dataset(WING_CHUN)
