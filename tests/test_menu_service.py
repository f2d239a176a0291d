import pytest
from decimal import Decimal
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from services.menu_group_service import create_menu_group, get_all_menu_groups, get_menu_group_by_id
from services.product_service import create_product, get_all_products, get_product_by_id
from services.menu_service import create_menu, get_all_menus, get_menu_by_id, delete_menu
from services.table_service import create_table
from services.order_service import create_order
from models.menu import Menu, MenuProduct
from utils.exceptions import InvalidArgumentError, NotFoundError
from database.base import Base

@pytest.fixture
async def test_db():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_session

    await engine.dispose()

async def count_rows(session, model) -> int:
    return await session.scalar(select(func.count()).select_from(model))

@pytest.mark.asyncio
async def test_create_product(test_db):
    async_session = test_db

    async with async_session() as session:
        product = await create_product(session, "Жареная курица", Decimal("16000"))

        assert product.id is not None
        assert product.name == "Жареная курица"
        assert product.price == Decimal("16000")
        assert await get_product_by_id(session, product.id) is product
        assert [p.id for p in await get_all_products(session)] == [product.id]

@pytest.mark.asyncio
@pytest.mark.parametrize("name,price", [
    ("", Decimal("1000")),
    ("Курица", None),
    ("Курица", Decimal("-1")),
])
async def test_create_product_invalid(test_db, name, price):
    async_session = test_db

    async with async_session() as session:
        with pytest.raises(InvalidArgumentError):
            await create_product(session, name, price)

        assert await get_all_products(session) == []

@pytest.mark.asyncio
async def test_create_menu_group(test_db):
    async_session = test_db

    async with async_session() as session:
        menu_group = await create_menu_group(session, "Две курицы")

        assert menu_group.id is not None
        assert (await get_menu_group_by_id(session, menu_group.id)).name == "Две курицы"
        assert len(await get_all_menu_groups(session)) == 1

        with pytest.raises(InvalidArgumentError):
            await create_menu_group(session, "  ")

@pytest.fixture
async def catalog(test_db):
    """Группа меню и два продукта по 600 и 500"""
    async with test_db() as session:
        menu_group = await create_menu_group(session, "Сеты")
        product1 = await create_product(session, "Курица", Decimal("600"))
        product2 = await create_product(session, "Картофель", Decimal("500"))
        return menu_group.id, product1.id, product2.id

@pytest.mark.asyncio
@pytest.mark.parametrize("price", [Decimal("1000"), Decimal("1100"), Decimal("0")])
async def test_create_menu_price_not_above_products_sum(test_db, catalog, price):
    menu_group_id, product1_id, product2_id = catalog

    async with test_db() as session:
        menu = await create_menu(
            session,
            "Сет",
            price,
            menu_group_id,
            [{"product_id": product1_id, "quantity": 1}, {"product_id": product2_id, "quantity": 1}]
        )

        assert menu.id is not None
        assert menu.price == price
        assert menu.menu_group_id == menu_group_id
        assert [mp.product_id for mp in menu.menu_products] == [product1_id, product2_id]
        assert all(mp.menu_id == menu.id for mp in menu.menu_products)
        assert all(mp.seq is not None for mp in menu.menu_products)

@pytest.mark.asyncio
async def test_create_menu_price_above_products_sum(test_db, catalog):
    menu_group_id, product1_id, product2_id = catalog

    async with test_db() as session:
        with pytest.raises(InvalidArgumentError, match="больше суммы"):
            await create_menu(
                session,
                "Сет",
                Decimal("1200"),
                menu_group_id,
                [{"product_id": product1_id, "quantity": 1}, {"product_id": product2_id, "quantity": 1}]
            )

        assert await count_rows(session, Menu) == 0
        assert await count_rows(session, MenuProduct) == 0

@pytest.mark.asyncio
async def test_create_menu_quantity_counts_in_sum(test_db, catalog):
    menu_group_id, product1_id, _ = catalog

    async with test_db() as session:
        menu = await create_menu(session, "Три курицы", Decimal("1800"), menu_group_id,
                                 [{"product_id": product1_id, "quantity": 3}])
        assert menu.menu_products[0].quantity == 3

        with pytest.raises(InvalidArgumentError):
            await create_menu(session, "Три курицы", Decimal("1800.01"), menu_group_id,
                              [{"product_id": product1_id, "quantity": 3}])

@pytest.mark.asyncio
@pytest.mark.parametrize("menu_products", [None, []])
async def test_create_menu_without_products(test_db, catalog, menu_products):
    menu_group_id, _, _ = catalog

    async with test_db() as session:
        with pytest.raises(InvalidArgumentError):
            await create_menu(session, "Сет", Decimal("1000"), menu_group_id, menu_products)

@pytest.mark.asyncio
@pytest.mark.parametrize("menu_group_id", [None, 999])
async def test_create_menu_without_menu_group(test_db, catalog, menu_group_id):
    _, product1_id, _ = catalog

    async with test_db() as session:
        with pytest.raises(InvalidArgumentError, match="Группа меню"):
            await create_menu(session, "Сет", Decimal("100"), menu_group_id,
                              [{"product_id": product1_id, "quantity": 1}])

@pytest.mark.asyncio
async def test_create_menu_checks_group_before_products(test_db):
    async with test_db() as session:
        with pytest.raises(InvalidArgumentError, match="Группа меню"):
            await create_menu(session, "Сет", Decimal("100"), None, [])

@pytest.mark.asyncio
async def test_create_menu_unknown_product(test_db, catalog):
    menu_group_id, product1_id, _ = catalog

    async with test_db() as session:
        with pytest.raises(NotFoundError, match="999"):
            await create_menu(
                session,
                "Сет",
                Decimal("100"),
                menu_group_id,
                [{"product_id": product1_id, "quantity": 1}, {"product_id": 999, "quantity": 1}]
            )

        assert await count_rows(session, Menu) == 0

@pytest.mark.asyncio
@pytest.mark.parametrize("name,price", [(" ", Decimal("100")), ("Сет", Decimal("-100")), ("Сет", None)])
async def test_create_menu_invalid_name_or_price(test_db, catalog, name, price):
    menu_group_id, product1_id, _ = catalog

    async with test_db() as session:
        with pytest.raises(InvalidArgumentError):
            await create_menu(session, name, price, menu_group_id,
                              [{"product_id": product1_id, "quantity": 1}])

@pytest.mark.asyncio
async def test_get_all_menus(test_db, catalog):
    menu_group_id, product1_id, product2_id = catalog

    async with test_db() as session:
        other_group = await create_menu_group(session, "Другое")
        menu1 = await create_menu(session, "Курица", Decimal("600"), menu_group_id,
                                  [{"product_id": product1_id, "quantity": 1}])
        menu2 = await create_menu(session, "Картофель", Decimal("500"), other_group.id,
                                  [{"product_id": product2_id, "quantity": 1}])

    async with test_db() as session:
        menus = await get_all_menus(session)
        assert [m.id for m in menus] == [menu1.id, menu2.id]
        assert len(menus[0].menu_products) == 1

        grouped = await get_all_menus(session, menu_group_id=other_group.id)
        assert [m.id for m in grouped] == [menu2.id]

@pytest.mark.asyncio
async def test_menu_price_is_not_revalidated_after_product_changes(test_db, catalog):
    """Цена продукта читается только при создании меню"""
    menu_group_id, product1_id, _ = catalog

    async with test_db() as session:
        menu = await create_menu(session, "Курица", Decimal("600"), menu_group_id,
                                 [{"product_id": product1_id, "quantity": 1}])
        product = await get_product_by_id(session, product1_id)
        product.price = Decimal("100")
        await session.commit()

        stored = await get_menu_by_id(session, menu.id)
        assert stored.price == Decimal("600")

@pytest.mark.asyncio
async def test_delete_menu_removes_menu_products(test_db, catalog):
    menu_group_id, product1_id, product2_id = catalog

    async with test_db() as session:
        menu = await create_menu(
            session,
            "Сет",
            Decimal("1000"),
            menu_group_id,
            [{"product_id": product1_id, "quantity": 1}, {"product_id": product2_id, "quantity": 1}]
        )

        await delete_menu(session, menu.id)

        assert await get_menu_by_id(session, menu.id) is None
        assert await count_rows(session, MenuProduct) == 0

        with pytest.raises(NotFoundError):
            await delete_menu(session, menu.id)

@pytest.mark.asyncio
async def test_delete_ordered_menu_rejected(test_db, catalog):
    menu_group_id, product1_id, _ = catalog

    async with test_db() as session:
        menu = await create_menu(session, "Курица", Decimal("600"), menu_group_id,
                                 [{"product_id": product1_id, "quantity": 1}])
        table = await create_table(session, number_of_guests=2, empty=False)
        await create_order(session, table.id, [{"menu_id": menu.id, "quantity": 1}])

        with pytest.raises(InvalidArgumentError, match="используется"):
            await delete_menu(session, menu.id)

        assert await get_menu_by_id(session, menu.id) is not None

@pytest.mark.asyncio
async def test_create_menu_line_item_not_dict(test_db, catalog):
    menu_group_id, _, _ = catalog

    async with test_db() as session:
        with pytest.raises(InvalidArgumentError, match="словарем"):
            await create_menu(session, "Сет", Decimal("100"), menu_group_id, [42])

        assert await count_rows(session, Menu) == 0

@pytest.mark.asyncio
async def test_large_prices_are_stored_exactly(test_db):
    """Цены больше 2^53 не теряют точность при записи и чтении"""
    price = Decimal("9007199254740993.00")

    async with test_db() as session:
        menu_group = await create_menu_group(session, "Дорогие сеты")
        product = await create_product(session, "Трюфель", price)
        product_id = product.id

    async with test_db() as session:
        stored = await get_product_by_id(session, product_id)
        assert stored.price == price

        menu = await create_menu(session, "Трюфельный сет", price, menu_group.id,
                                 [{"product_id": product_id, "quantity": 1}])
        assert menu.price == price

        with pytest.raises(InvalidArgumentError, match="больше суммы"):
            await create_menu(session, "Трюфельный сет", price + Decimal("0.01"), menu_group.id,
                              [{"product_id": product_id, "quantity": 1}])

    async with test_db() as session:
        assert (await get_menu_by_id(session, menu.id)).price == price
