"""
Shop model unit tests
"""
from datetime import datetime, timedelta, timezone
import pytest

from core.exceptions import ValidationError, NotFoundError, InsufficientStockError
from models.shop import Shop, ShopType, Weekday, OpeningHours, PaymentMethod, normalize_clock
from models.rating import Review
from services.shop import get_shop_by_id
from tests.fixtures.sample_data import MONDAY, SUNDAY


def build_shop(**overrides):
    fields = {
        "owner_id": "owner-1",
        "name": "Test Shop",
        "email": "test@example.com",
        "phone": "5550100000",
        "type": ShopType.GENERAL,
    }
    fields.update(overrides)
    return Shop(**fields)


class TestShopConstruction:
    """Shop construction defaults"""

    def test_defaults_for_unsaved_shop(self):
        """Collections, flags and the rating summary are usable before saving"""
        shop = build_shop()

        assert shop.id
        assert shop.reviews == []
        assert shop.products == []
        assert shop.opening_hours == []
        assert shop.images == []
        assert shop.payment_methods == [PaymentMethod.CASH.value]
        assert shop.longitude == 0.0 and shop.latitude == 0.0
        assert shop.is_open is True
        assert shop.is_verified is False
        assert shop.has_delivery is False
        assert shop.rating == {"average": 0.0, "count": 0}
        assert isinstance(shop.created_at, datetime)
        assert shop.created_at == shop.updated_at

    def test_explicit_values_win_over_defaults(self):
        shop = build_shop(is_open=False, longitude=10.5, images=["a.png"])

        assert shop.is_open is False
        assert shop.longitude == 10.5
        assert shop.images == ["a.png"]

    def test_repr(self):
        shop = build_shop()
        assert "Test Shop" in repr(shop)

    def test_normalize_clock(self):
        assert normalize_clock("09:00") == "09:00:00"
        assert normalize_clock("09:00:30") == "09:00:30"


class TestComputeAverageRating:
    """compute_average_rating tests"""

    def test_no_reviews_is_zero(self):
        assert build_shop().compute_average_rating() == 0

    @pytest.mark.parametrize("ratings", [[5], [1, 2], [4, 4, 5], [1, 2, 3, 4, 5], [3, 3, 3, 2]])
    def test_mean_of_ratings(self, ratings):
        shop = build_shop()
        for i, rating in enumerate(ratings):
            shop.reviews.append(Review(reviewer_id=f"user-{i}", rating=rating))

        assert shop.compute_average_rating() == pytest.approx(sum(ratings) / len(ratings))

    def test_has_no_side_effects(self):
        shop = build_shop()
        shop.reviews.append(Review(reviewer_id="user-1", rating=2))

        shop.compute_average_rating()

        assert shop.average_rating == 0.0
        assert shop.total_reviews == 0


class TestIsOpenAt:
    """is_open_at tests"""

    @pytest.fixture
    def monday_shop(self):
        shop = build_shop()
        shop.opening_hours.append(
            OpeningHours(day=Weekday.MONDAY, open_time="09:00:00", close_time="17:00:00", is_closed=False)
        )
        return shop

    def test_open_during_hours(self, monday_shop):
        assert monday_shop.is_open_at(MONDAY.replace(hour=12)) is True

    def test_closed_after_hours(self, monday_shop):
        assert monday_shop.is_open_at(MONDAY.replace(hour=18)) is False
        assert monday_shop.is_open_at(MONDAY.replace(hour=8, minute=59, second=59)) is False

    def test_boundaries_are_inclusive(self, monday_shop):
        assert monday_shop.is_open_at(MONDAY.replace(hour=9)) is True
        assert monday_shop.is_open_at(MONDAY.replace(hour=17)) is True
        assert monday_shop.is_open_at(MONDAY.replace(hour=17, second=1)) is False

    @pytest.mark.parametrize("hour", [0, 9, 12, 17, 23])
    def test_day_without_entry_is_closed(self, monday_shop, hour):
        assert monday_shop.is_open_at(SUNDAY.replace(hour=hour)) is False

    def test_day_marked_closed(self):
        shop = build_shop()
        shop.opening_hours.append(
            OpeningHours(day=Weekday.MONDAY, open_time="09:00", close_time="17:00", is_closed=True)
        )
        assert shop.is_open_at(MONDAY.replace(hour=12)) is False

    def test_short_clock_format(self):
        shop = build_shop()
        shop.opening_hours.append(OpeningHours(day=Weekday.MONDAY, open_time="09:00", close_time="17:00"))

        assert shop.is_open_at(MONDAY.replace(hour=17)) is True
        assert shop.is_open_at(MONDAY.replace(hour=17, minute=0, second=30)) is False

    def test_window_crossing_midnight_never_matches(self):
        shop = build_shop()
        shop.opening_hours.append(OpeningHours(day=Weekday.MONDAY, open_time="22:00", close_time="02:00"))

        assert shop.is_open_at(MONDAY.replace(hour=23)) is False
        assert shop.is_open_at(MONDAY.replace(hour=1)) is False

    def test_uses_wall_time_of_aware_instant(self, monday_shop):
        instant = datetime(2024, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=-6)))
        assert monday_shop.is_open_at(instant) is True

    def test_every_weekday_maps_to_its_entry(self):
        shop = build_shop()
        for day in Weekday:
            shop.opening_hours.append(OpeningHours(day=day, open_time="10:00", close_time="11:00"))

        for offset in range(7):
            assert shop.is_open_at(MONDAY + timedelta(days=offset, hours=10, minutes=30)) is True


class TestAddReview:
    """add_review tests"""

    def test_two_reviews_scenario(self, db_session, make_shop):
        """4 then 2 gives an average of 3.0 over 2 reviews"""
        shop = make_shop()

        shop.add_review(db_session, "u1", 4, "good")
        shop.add_review(db_session, "u2", 2, "ok")

        assert shop.average_rating == 3.0
        assert shop.total_reviews == 2
        assert shop.rating == {"average": 3.0, "count": 2}

    def test_count_grows_by_one(self, db_session, shop):
        before = shop.total_reviews

        review = shop.add_review(db_session, "u1", 5)

        assert shop.total_reviews == before + 1
        assert shop.total_reviews == len(shop.reviews)
        assert review.rating == 5
        assert review.comment is None
        assert isinstance(review.created_at, datetime)

    def test_persists_review_and_summary(self, db_session, shop):
        shop.add_review(db_session, "u1", 5, "great")
        shop.add_review(db_session, "u2", 4)
        db_session.expire_all()

        reloaded = get_shop_by_id(db_session, shop.id)

        assert [r.rating for r in reloaded.reviews] == [5, 4]
        assert reloaded.average_rating == 4.5
        assert reloaded.total_reviews == 2

    def test_refreshes_updated_at(self, db_session, shop):
        stale = datetime(2000, 1, 1)
        shop.updated_at = stale

        shop.add_review(db_session, "u1", 3)

        assert shop.updated_at > stale

    @pytest.mark.parametrize("rating", [0, 6, -1, 4.5, "5", None, True])
    def test_rejects_invalid_rating(self, db_session, shop, rating):
        with pytest.raises(ValidationError) as exc_info:
            shop.add_review(db_session, "u1", rating)

        assert exc_info.value.details["field"] == "rating"
        assert shop.reviews == []
        assert shop.total_reviews == 0

    def test_rejects_missing_reviewer(self, db_session, shop):
        with pytest.raises(ValidationError):
            shop.add_review(db_session, "", 4)
        assert shop.reviews == []


class TestUpdateStock:
    """update_stock tests"""

    def test_round_trip_restores_stock(self, db_session, shop):
        product = shop.products[0]
        original_stock, original_available = product.stock, product.is_available

        shop.update_stock(db_session, product.id, 5)
        assert product.stock == original_stock + 5

        shop.update_stock(db_session, product.id, -5)
        assert product.stock == original_stock
        assert product.is_available == original_available

    def test_availability_follows_stock(self, db_session, shop):
        empty = shop.products[1]
        assert empty.stock == 0 and empty.is_available is False

        shop.update_stock(db_session, empty.id, 3)
        assert empty.is_available is True

        shop.update_stock(db_session, empty.id, -3)
        assert empty.stock == 0
        assert empty.is_available is False

    def test_insufficient_stock_leaves_state_untouched(self, db_session, shop):
        product = shop.products[0]
        stale = datetime(2000, 1, 1)
        shop.updated_at = stale

        with pytest.raises(InsufficientStockError) as exc_info:
            shop.update_stock(db_session, product.id, -(product.stock + 1))

        assert exc_info.value.details == {"product_id": product.id, "available": 10, "requested": -11}
        assert product.stock == 10
        assert product.is_available is True
        assert shop.updated_at == stale

        db_session.expire_all()
        assert get_shop_by_id(db_session, shop.id).products[0].stock == 10

    def test_draining_to_zero_is_allowed(self, db_session, shop):
        product = shop.products[0]
        shop.update_stock(db_session, product.id, -product.stock)

        assert product.stock == 0
        assert product.is_available is False

    def test_unknown_product(self, db_session, shop):
        with pytest.raises(NotFoundError) as exc_info:
            shop.update_stock(db_session, "missing-product", 1)
        assert exc_info.value.status_code == 404

    @pytest.mark.parametrize("delta", [1.5, "2", None])
    def test_rejects_non_integer_delta(self, db_session, shop, delta):
        with pytest.raises(ValidationError):
            shop.update_stock(db_session, shop.products[0].id, delta)

    def test_persists_and_refreshes_updated_at(self, db_session, shop):
        product = shop.products[0]
        stale = datetime(2000, 1, 1)
        shop.updated_at = stale

        shop.update_stock(db_session, product.id, -4)
        db_session.expire_all()

        reloaded = get_shop_by_id(db_session, shop.id)
        assert reloaded.products[0].stock == 6
        assert reloaded.updated_at > stale
