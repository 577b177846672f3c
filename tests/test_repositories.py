"""
Tests for repository classes.
Covers filtering, ordering, pagination, gallery replacement and foreign-key cascades.
"""

import pytest
import uuid
from decimal import Decimal
from sqlalchemy import select, func

from app.models.user import User
from app.models.area import Area
from app.models.property import Property, PropertyCategory, PropertyType, PropertyStatus
from app.models.image import PropertyImage
from app.models.favorite import Favorite
from app.models.inquiry import ContactInquiry, InquiryStatus
from app.repositories.user import UserRepository
from app.repositories.area import AreaRepository
from app.repositories.property import PropertyRepository, PropertySearchFilters
from app.repositories.image import ImageRepository
from app.repositories.favorite import FavoriteRepository
from app.repositories.inquiry import InquiryRepository
from tests.conftest import AreaFactory, PropertyFactory


async def _count(db_session, model, *conditions) -> int:
    result = await db_session.execute(select(func.count(model.id)).where(*conditions))
    return result.scalar()


class TestBaseRepository:
    """Generic CRUD behaviour through UserRepository."""

    @pytest.mark.asyncio
    async def test_update_merges_given_fields_only(self, db_session, test_agent: User):
        repo = UserRepository(db_session)
        await repo.update(test_agent, {"phone": "07000000000"})

        reloaded = await repo.get_by_id(test_agent.id)
        assert reloaded.phone == "07000000000"
        assert reloaded.first_name == "Ada"

    @pytest.mark.asyncio
    async def test_delete_reports_missing_rows(self, db_session):
        assert await UserRepository(db_session).delete(uuid.uuid4()) is False

    @pytest.mark.asyncio
    async def test_exists(self, db_session, test_agent: User):
        repo = UserRepository(db_session)
        assert await repo.exists(test_agent.id) is True
        assert await repo.exists(uuid.uuid4()) is False

    @pytest.mark.asyncio
    async def test_get_by_email_normalises(self, db_session, test_agent: User):
        user = await UserRepository(db_session).get_by_email("  AGENT@Test.com ")
        assert user is not None
        assert user.id == test_agent.id


class TestPropertyRepository:
    """Test PropertyRepository search and lookups."""

    @pytest.fixture
    async def listings(self, db_session, test_agent: User, test_area: Area):
        maitama = await AreaFactory.create_area(db_session, name="Maitama")
        rent_flat = await PropertyFactory.create_property(
            db_session, owner=test_agent, area=test_area, title="Rent Flat", price=Decimal("1000000")
        )
        sale_house = await PropertyFactory.create_property(
            db_session, owner=test_agent, area=maitama, title="Sale House",
            category=PropertyCategory.SALE, property_type=PropertyType.HOUSE,
            price=Decimal("90000000"), featured=True
        )
        land = await PropertyFactory.create_property(
            db_session, owner=test_agent, area=maitama, title="Land Plot",
            category=PropertyCategory.LAND, property_type=PropertyType.LAND,
            price=Decimal("5000000"), status=PropertyStatus.SOLD, featured=True
        )
        return {"maitama": maitama, "rent_flat": rent_flat, "sale_house": sale_house, "land": land}

    @pytest.mark.asyncio
    async def test_no_filters_returns_newest_first(self, db_session, listings):
        properties, total = await PropertyRepository(db_session).search_properties(PropertySearchFilters())

        assert total == 3
        assert [p.title for p in properties] == ["Land Plot", "Sale House", "Rent Flat"]

    @pytest.mark.asyncio
    async def test_equality_filters(self, db_session, listings):
        repo = PropertyRepository(db_session)

        properties, total = await repo.search_properties(PropertySearchFilters(category=PropertyCategory.SALE))
        assert total == 1 and properties[0].title == "Sale House"

        properties, total = await repo.search_properties(PropertySearchFilters(status=PropertyStatus.SOLD))
        assert total == 1 and properties[0].title == "Land Plot"

        properties, total = await repo.search_properties(PropertySearchFilters(property_type=PropertyType.FLAT))
        assert total == 1 and properties[0].title == "Rent Flat"

    @pytest.mark.asyncio
    async def test_featured_false_is_a_filter(self, db_session, listings):
        properties, total = await PropertyRepository(db_session).search_properties(
            PropertySearchFilters(featured=False)
        )
        assert total == 1
        assert properties[0].title == "Rent Flat"

    @pytest.mark.asyncio
    async def test_price_range_is_inclusive(self, db_session, listings):
        properties, total = await PropertyRepository(db_session).search_properties(
            PropertySearchFilters(min_price=Decimal("1000000"), max_price=Decimal("5000000"))
        )
        assert total == 2
        assert {p.title for p in properties} == {"Rent Flat", "Land Plot"}

    @pytest.mark.asyncio
    async def test_area_filter_by_slug_and_id(self, db_session, listings):
        repo = PropertyRepository(db_session)

        _, by_slug = await repo.search_properties(PropertySearchFilters(area="maitama"))
        _, by_id = await repo.search_properties(PropertySearchFilters(area=str(listings["maitama"].id)))
        _, unknown = await repo.search_properties(PropertySearchFilters(area="nowhere"))

        assert by_slug == 2
        assert by_id == 2
        assert unknown == 0

    @pytest.mark.asyncio
    async def test_pagination(self, db_session, listings):
        properties, total = await PropertyRepository(db_session).search_properties(
            PropertySearchFilters(), skip=2, limit=2
        )
        assert total == 3
        assert [p.title for p in properties] == ["Rent Flat"]

    @pytest.mark.asyncio
    async def test_featured_excludes_unavailable(self, db_session, listings):
        featured = await PropertyRepository(db_session).get_featured(limit=6)
        assert [p.title for p in featured] == ["Sale House"]

    @pytest.mark.asyncio
    async def test_slug_lookup_loads_gallery(self, db_session, test_property: Property):
        repo = PropertyRepository(db_session)
        found = await repo.get_by_slug("lake-view-flat")

        assert found.id == test_property.id
        assert [image.url for image in found.images] == [
            "http://test/uploads/properties/a.jpg",
            "http://test/uploads/properties/b.jpg",
        ]
        assert await repo.slug_exists("lake-view-flat") is True
        assert await repo.slug_exists("missing") is False


class TestImageRepository:

    @pytest.mark.asyncio
    async def test_replace_images_resets_order(self, db_session, test_property: Property):
        repo = ImageRepository(db_session)
        images = await repo.replace_images(test_property.id, ["x.jpg", "y.jpg", "z.jpg"])

        assert [(image.url, image.order) for image in images] == [("x.jpg", 0), ("y.jpg", 1), ("z.jpg", 2)]
        assert await repo.count_by_property_id(test_property.id) == 3

    @pytest.mark.asyncio
    async def test_replace_with_empty_list_clears_gallery(self, db_session, test_property: Property):
        repo = ImageRepository(db_session)
        assert await repo.replace_images(test_property.id, []) == []
        assert await repo.count_by_property_id(test_property.id) == 0


class TestAreaRepository:

    @pytest.mark.asyncio
    async def test_all_with_counts_ordered_by_name(self, db_session, test_property: Property):
        await AreaFactory.create_area(db_session, name="Gwarinpa")
        await AreaFactory.create_area(db_session, name="Wuse")

        rows = await AreaRepository(db_session).get_all_with_counts()

        assert [(area.name, count) for area, count in rows] == [("Gwarinpa", 0), ("Jabi", 1), ("Wuse", 0)]

    @pytest.mark.asyncio
    async def test_slug_exists_can_exclude_self(self, db_session, test_area: Area):
        repo = AreaRepository(db_session)
        assert await repo.slug_exists("jabi") is True
        assert await repo.slug_exists("jabi", exclude_id=test_area.id) is False


class TestFavoriteAndInquiryRepositories:

    @pytest.mark.asyncio
    async def test_user_favorites_newest_first(self, db_session, test_agent: User, other_agent: User, test_area: Area):
        first = await PropertyFactory.create_property(db_session, owner=test_agent, area=test_area, title="First")
        second = await PropertyFactory.create_property(db_session, owner=test_agent, area=test_area, title="Second")
        repo = FavoriteRepository(db_session)
        await repo.create({"user_id": other_agent.id, "property_id": first.id})
        await repo.create({"user_id": other_agent.id, "property_id": second.id})

        favorites, total = await repo.get_user_favorites(other_agent.id)

        assert total == 2
        assert [favorite.property_rel.title for favorite in favorites] == ["Second", "First"]
        assert await repo.get_for_user(test_agent.id, first.id) is None

    @pytest.mark.asyncio
    async def test_inquiry_filters(self, db_session, test_property: Property):
        repo = InquiryRepository(db_session)
        for status in (InquiryStatus.PENDING, InquiryStatus.PENDING, InquiryStatus.CLOSED):
            await repo.create({
                "property_id": test_property.id,
                "email": "buyer@example.com",
                "phone": "08011111111",
                "message": "Hello",
                "status": status,
            })

        _, pending = await repo.search_inquiries(status=InquiryStatus.PENDING)
        _, for_property = await repo.search_inquiries(property_id=test_property.id)
        _, elsewhere = await repo.search_inquiries(property_id=uuid.uuid4())

        assert pending == 2
        assert for_property == 3
        assert elsewhere == 0


class TestCascades:
    """ON DELETE rules are enforced by the database."""

    @pytest.mark.asyncio
    async def test_deleting_property_removes_dependents(self, db_session, test_property: Property, other_agent: User):
        await FavoriteRepository(db_session).create({"user_id": other_agent.id, "property_id": test_property.id})
        await InquiryRepository(db_session).create({
            "property_id": test_property.id,
            "email": "buyer@example.com",
            "phone": "08011111111",
            "message": "Hello",
        })

        assert await PropertyRepository(db_session).delete(test_property.id) is True

        assert await _count(db_session, PropertyImage, PropertyImage.property_id == test_property.id) == 0
        assert await _count(db_session, Favorite, Favorite.property_id == test_property.id) == 0
        assert await _count(db_session, ContactInquiry, ContactInquiry.property_id == test_property.id) == 0

    @pytest.mark.asyncio
    async def test_deleting_user_clears_inquiry_sender(self, db_session, test_property: Property, other_agent: User):
        await FavoriteRepository(db_session).create({"user_id": other_agent.id, "property_id": test_property.id})
        inquiry = await InquiryRepository(db_session).create({
            "property_id": test_property.id,
            "user_id": other_agent.id,
            "email": "other@test.com",
            "phone": "08011111111",
            "message": "Hello",
        })

        assert await UserRepository(db_session).delete(other_agent.id) is True

        reloaded = await InquiryRepository(db_session).get_by_id(inquiry.id)
        assert reloaded is not None
        assert reloaded.user_id is None
        assert await _count(db_session, Favorite, Favorite.user_id == other_agent.id) == 0
