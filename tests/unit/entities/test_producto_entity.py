"""Tests for the Producto entity and its declarative constraints."""

import pytest
from pydantic import ValidationError

from src.catalog.api.http.schemas import validation_messages
from src.catalog.entities.catalog.presentacion import Presentacion
from src.catalog.entities.catalog.producto import Producto, ProductoTable


class TestProductoValidation:
    """Constraint messages produced when binding a product."""

    def test_valid_producto(self):
        producto = Producto(nombre="Manzana", precio=1.5, stock=10)

        assert producto.id is None
        assert producto.nombre == "Manzana"
        assert producto.imagen_producto is None
        assert producto.presentacion is None

    def test_empty_nombre_reports_single_message(self):
        with pytest.raises(ValidationError) as exc_info:
            Producto.model_validate_json('{"nombre": ""}')

        assert validation_messages(exc_info.value.errors()) == [
            "El nombre del producto no puede estar vacío"
        ]

    def test_blank_nombre_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Producto(nombre="   ")

        assert validation_messages(exc_info.value.errors()) == [
            "El nombre del producto no puede estar vacío"
        ]

    def test_too_long_nombre(self):
        with pytest.raises(ValidationError) as exc_info:
            Producto(nombre="x" * 101)

        assert validation_messages(exc_info.value.errors()) == [
            "El nombre del producto no puede superar los 100 caracteres"
        ]

    def test_every_failed_constraint_is_reported_in_field_order(self):
        with pytest.raises(ValidationError) as exc_info:
            Producto.model_validate({"nombre": "", "precio": -1, "stock": -5})

        assert validation_messages(exc_info.value.errors()) == [
            "El nombre del producto no puede estar vacío",
            "El precio no puede ser negativo",
            "El stock no puede ser negativo",
        ]

    def test_missing_nombre(self):
        with pytest.raises(ValidationError) as exc_info:
            Producto.model_validate({"precio": 3})

        errors = exc_info.value.errors()
        assert len(errors) == 1
        assert errors[0]["loc"] == ("nombre",)


class TestProductoSerialization:
    """Wire names of the product fields."""

    def test_imagen_producto_accepts_and_emits_camel_case(self):
        producto = Producto.model_validate(
            {"nombre": "Pera", "imagenProducto": "abc-pera.png"}
        )

        assert producto.imagen_producto == "abc-pera.png"
        dumped = producto.model_dump(by_alias=True)
        assert dumped["imagenProducto"] == "abc-pera.png"
        assert "imagen_producto" not in dumped

    def test_nested_presentacion(self):
        producto = Producto.model_validate(
            {"nombre": "Leche", "presentacion": {"id": 3, "nombre": "Litro"}}
        )

        assert isinstance(producto.presentacion, Presentacion)
        assert producto.presentacion.id == 3
        assert producto.presentacion.nombre == "Litro"
        assert producto.presentacion_id == 3

    def test_equality_uses_observable_fields(self):
        first = Producto(id=1, nombre="Pan", precio=2.0)
        second = Producto(id=1, nombre="Pan", precio=2.0)
        third = Producto(id=1, nombre="Pan", precio=2.5)

        assert first == second
        assert hash(first) == hash(second)
        assert first != third


class TestProductoTable:
    def test_from_entity_copies_columns_and_presentacion_id(self):
        producto = Producto(
            id=7,
            nombre="Queso",
            descripcion="Curado",
            precio=12.5,
            stock=4,
            imagen_producto="code-queso.jpg",
            presentacion=Presentacion(id=2),
        )

        row = ProductoTable.from_entity(producto)

        assert row.id == 7
        assert row.nombre == "Queso"
        assert row.descripcion == "Curado"
        assert row.precio == 12.5
        assert row.stock == 4
        assert row.imagen_producto == "code-queso.jpg"
        assert row.presentacion_id == 2

    def test_from_entity_without_presentacion(self):
        row = ProductoTable.from_entity(Producto(nombre="Sal"))

        assert row.id is None
        assert row.presentacion_id is None
