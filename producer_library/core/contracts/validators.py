"""
JSON Schema Contract Validators

Модуль для валидации снапшота состояния маркетплейса согласно формальному
JSON Schema контракту. Использует библиотеку jsonschema.

Схемы:
- marketplace_state.json (таблица треков, журнал транзакций, счётчики)
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'marketplace_state')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class MarketplaceStateValidator(ContractValidator):
    """
    Валидатор для marketplace_state контракта.

    Кроме схемы проверяет согласованность снапшота, которую JSON Schema
    выразить не может:
    - len(tracks) == next_track_id, len(transactions) == next_transaction_id
    - transactions[i].id == i
    - payment == price у оплаченной транзакции, payment == 0 у неоплаченной

    Проверки согласованности выполняются только для данных, прошедших схему.
    """

    def __init__(self):
        super().__init__("marketplace_state")

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: первая ошибка схемы или согласованности
        """
        for error in self.iter_errors(data):
            raise error

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return next(iter(self.iter_errors(data)), None) is None

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        schema_errors = list(self.validator.iter_errors(data))
        if schema_errors:
            yield from schema_errors
            return
        yield from self._consistency_errors(data)

    @staticmethod
    def _consistency_errors(data: Dict[str, Any]) -> Iterator[ValidationError]:
        tracks = data["tracks"]
        transactions = data["transactions"]

        if len(tracks) != data["next_track_id"]:
            yield ValidationError(
                f"next_track_id {data['next_track_id']} does not match {len(tracks)} track slots"
            )
        if len(transactions) != data["next_transaction_id"]:
            yield ValidationError(
                f"next_transaction_id {data['next_transaction_id']} does not match "
                f"{len(transactions)} transactions"
            )

        for index, transaction in enumerate(transactions):
            if transaction["id"] != index:
                yield ValidationError(
                    f"transaction at position {index} has id {transaction['id']}"
                )
            if transaction["has_finished_payment"]:
                if transaction["payment"] != transaction["price"]:
                    yield ValidationError(
                        f"settled transaction {transaction['id']} payment "
                        f"{transaction['payment']} must equal price {transaction['price']}"
                    )
            elif transaction["payment"] != 0:
                yield ValidationError(
                    f"unsettled transaction {transaction['id']} payment must be 0, "
                    f"got {transaction['payment']}"
                )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_marketplace_state(data: Dict[str, Any]) -> None:
    """
    Валидация снапшота состояния маркетплейса.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    MarketplaceStateValidator().validate(data)
