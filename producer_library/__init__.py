"""
Producer Library: маркетплейс треков одного продюсера.

Продюсер ведёт каталог треков, покупатели отправляют запросы на покупку,
продюсер их одобряет, покупатель оплачивает через внешний платёжный канал.
"""

from producer_library.marketplace import Marketplace

__all__ = ["Marketplace"]
