"""
Repository tests against the in-memory database.

Service tests cover most queries indirectly; these pin down the lookups
services rely on for uniqueness and ownership checks.
"""

import uuid
from decimal import Decimal

from sqlalchemy.orm import Session

from domain.models import Favorite, MealIngredient, UserCustomIngredient
from repositories import (
    CustomIngredientRepository,
    FavoriteRepository,
    IngredientRepository,
    MealCategoryRepository,
    MealRepository,
    ProfileRepository,
)
from test_fixtures import (
    create_category,
    create_ingredient,
    create_meal,
    create_profile,
    db_session,
)


def test_base_repository_crud(db_session: Session):
    repo = MealCategoryRepository(db_session)
    bowls = create_category(db_session, name="Bowls", display_order=2)
    create_category(db_session, name="Wraps", display_order=1)

    assert repo.count() == 2
    assert repo.exists(bowls.id)
    assert repo.get_by_id(uuid.uuid4()) is None
    assert [c.name for c in repo.list_ordered()] == ["Wraps", "Bowls"]

    assert repo.delete(bowls.id) is True
    assert repo.delete(bowls.id) is False
    assert repo.count() == 1


def test_category_lookup_ignores_case(db_session: Session):
    create_category(db_session, name="Bowls")
    assert MealCategoryRepository(db_session).get_by_name("BOWLS") is not None


def test_ingredient_lookup_by_name_and_ids(db_session: Session):
    repo = IngredientRepository(db_session)
    chicken = create_ingredient(db_session, name="Chicken Breast")
    rice = create_ingredient(db_session, name="Brown Rice")

    assert repo.get_by_name("  chicken breast ").id == chicken.id
    assert repo.get_by_name("tofu") is None
    assert {i.id for i in repo.get_many([chicken.id, rice.id, uuid.uuid4()])} == {
        chicken.id,
        rice.id,
    }
    assert repo.get_many([]) == []
    assert [i.name for i in repo.search("RICE")] == ["Brown Rice"]


def test_meal_usage_counts(db_session: Session):
    chicken = create_ingredient(db_session)
    bowls = create_category(db_session)
    first = create_meal(db_session, bowls, name="Chicken Bowl")
    second = create_meal(db_session, bowls, name="Chicken Wrap")
    for meal in (first, second):
        db_session.add(
            MealIngredient(
                meal_id=meal.id, ingredient_id=chicken.id, quantity_grams=Decimal("120")
            )
        )
    db_session.commit()

    assert IngredientRepository(db_session).count_meal_usages(chicken.id) == 2
    assert MealRepository(db_session).count_by_category(bowls.id) == 2
    assert IngredientRepository(db_session).count_meal_usages(uuid.uuid4()) == 0


def test_custom_ingredients_are_scoped_to_owner(db_session: Session):
    owner = create_profile(db_session, full_name="Priya Sharma")
    other = create_profile(db_session, full_name="Rahul Verma")
    ghee = UserCustomIngredient(customer_id=owner.id, name="Mum's Ghee")
    db_session.add(ghee)
    db_session.commit()

    repo = CustomIngredientRepository(db_session)
    assert repo.get_owned(ghee.id, owner.id) is not None
    assert repo.get_owned(ghee.id, other.id) is None
    assert repo.get_many_owned([ghee.id], other.id) == []
    assert [i.name for i in repo.get_by_customer(owner.id)] == ["Mum's Ghee"]


def test_favorites_repository(db_session: Session):
    user = create_profile(db_session)
    bowls = create_category(db_session)
    wrap = create_meal(db_session, bowls, name="Chicken Wrap")
    bowl = create_meal(db_session, bowls, name="Avocado Bowl")
    repo = FavoriteRepository(db_session)
    repo.create(Favorite(user_id=user.id, meal_id=wrap.id))
    repo.create(Favorite(user_id=user.id, meal_id=bowl.id))

    assert repo.get(user.id, wrap.id) is not None
    assert set(repo.meal_ids_for_user(user.id)) == {wrap.id, bowl.id}
    assert [m.name for m in repo.meals_for_user(user.id)] == ["Avocado Bowl", "Chicken Wrap"]

    assert repo.delete_for_user(user.id, wrap.id) is True
    assert repo.delete_for_user(user.id, wrap.id) is False
    assert ProfileRepository(db_session).get_by_email(user.email).id == user.id
