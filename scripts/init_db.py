import asyncio
import sys
from pathlib import Path

# Добавляем корневую директорию проекта в PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from decimal import Decimal
from database.database import init_db, get_session, close_db
from models.menu import Menu, MenuProduct
from models.menu_group import MenuGroup
from models.order import Order, OrderLineItem
from models.order_table import OrderTable
from models.product import Product
from services.menu_group_service import create_menu_group
from services.product_service import create_product
from services.menu_service import create_menu
from services.table_service import create_table
from sqlalchemy import select, delete

async def create_demo_data(force: bool = False):
    """
    Создает демонстрационные данные кассы:
    - Группы меню и продукты
    - Меню из продуктов (цена не выше суммы продуктов)
    - Пустые столы

    Args:
        force: Если True, удаляет существующие данные и создает заново
    """
    print("[INFO] Инициализация базы данных...")
    await init_db()

    async for session in get_session():
        result = await session.execute(select(Product))
        existing_products = result.scalars().all()

        if existing_products and not force:
            print("[WARNING] Демонстрационные данные уже существуют")
            print("[TIP] Используйте --force для пересоздания данных")
            break

        if force and existing_products:
            print("[INFO] Удаление существующих данных...")
            await session.execute(delete(OrderLineItem))
            await session.execute(delete(Order))
            await session.execute(delete(OrderTable))
            await session.execute(delete(MenuProduct))
            await session.execute(delete(Menu))
            await session.execute(delete(MenuGroup))
            await session.execute(delete(Product))
            await session.commit()
            print("[OK] Старые данные удалены")

        print("[INFO] Создание групп меню...")
        groups = {}
        for name in ["Одна курица", "Две курицы", "Сеты"]:
            groups[name] = await create_menu_group(session, name)
        print(f"[OK] Создано {len(groups)} групп меню")

        print("[INFO] Создание продуктов...")
        products_data = [
            ("Жареная курица", "16000"),
            ("Курица в соусе", "16000"),
            ("Курица с чесноком", "17000"),
            ("Курица с луком", "17000"),
            ("Картофель фри", "3000"),
            ("Кола", "2000"),
        ]
        products = {}
        for name, price in products_data:
            products[name] = await create_product(session, name, Decimal(price))
        print(f"[OK] Создано {len(products)} продуктов")

        print("[INFO] Создание меню...")
        menus_data = [
            ("Жареная курица", "16000", "Одна курица", [("Жареная курица", 1)]),
            ("Курица в соусе", "16000", "Одна курица", [("Курица в соусе", 1)]),
            ("Две жареные курицы", "30000", "Две курицы", [("Жареная курица", 2)]),
            ("Половина на половину", "31000", "Две курицы", [("Жареная курица", 1), ("Курица в соусе", 1)]),
            ("Сет с картофелем", "20000", "Сеты", [("Курица с чесноком", 1), ("Картофель фри", 1), ("Кола", 1)]),
        ]
        menus_created = 0
        for name, price, group_name, lines in menus_data:
            await create_menu(
                session,
                name,
                Decimal(price),
                groups[group_name].id,
                [{"product_id": products[product].id, "quantity": quantity} for product, quantity in lines]
            )
            menus_created += 1
        print(f"[OK] Создано {menus_created} меню")

        print("[INFO] Создание столов...")
        tables_count = 8
        for _ in range(tables_count):
            await create_table(session)
        print(f"[OK] Создано {tables_count} столов")

        print("\n" + "="*50)
        print("[SUCCESS] Демонстрационные данные успешно созданы!")
        print("="*50)
        print(f"[STATS] Статистика:")
        print(f"   - Групп меню: {len(groups)}")
        print(f"   - Продуктов: {len(products)}")
        print(f"   - Меню: {menus_created}")
        print(f"   - Столов: {tables_count}")

    await close_db()

if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Создание демонстрационных данных кассы")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Удалить существующие данные и создать заново"
    )

    args = parser.parse_args()
    asyncio.run(create_demo_data(force=args.force))
