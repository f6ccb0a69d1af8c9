"""Product API router: listing, lookup, multipart create, replace and delete."""

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response
from loguru import logger
from pydantic import ValidationError

from src.catalog.api.http.deps import get_file_store, get_producto_service
from src.catalog.api.http.schemas import (
    ErrorEnvelope,
    InfraErrorEnvelope,
    ProductoEnvelope,
    ValidationErrorEnvelope,
    validation_messages,
)
from src.catalog.core.exceptions import DataAccessError, FileStoreError, StoredFileNotFoundError
from src.catalog.core.paging import PageRequest, Sort
from src.catalog.core.services.file_store import FileStoreService, stored_filename
from src.catalog.core.services.producto_service import ProductoService
from src.catalog.entities._base import ID_MAX, ID_MIN
from src.catalog.entities.catalog.producto import Producto
from src.catalog.runtime.context import get_config

router = APIRouter(prefix="/productos", tags=["productos"])

SORT_BY_NOMBRE = Sort.by("nombre")


def _infra_error(error: Exception, status_code: int = 500) -> JSONResponse:
    cause = error.most_specific_cause if isinstance(error, DataAccessError) else error
    envelope = InfraErrorEnvelope(
        error_grave=f"Ha tenido lugar un error grave y la causa más probable puede ser: {cause}"
    )
    return JSONResponse(status_code=status_code, content=envelope.to_content())


def _validation_error(messages: list[str]) -> JSONResponse:
    envelope = ValidationErrorEnvelope(errores=messages)
    return JSONResponse(status_code=400, content=envelope.to_content())


@router.get("", response_model=list[Producto])
def list_productos(
    page: int | None = Query(default=None, description="Zero-based page index"),
    size: int | None = Query(default=None, description="Page size"),
    service: ProductoService = Depends(get_producto_service),
):
    """List products sorted by name, paged when both ``page`` and ``size`` are given."""
    try:
        if page is not None and size is not None:
            return service.find_page(PageRequest(page, size, SORT_BY_NOMBRE)).items
        return service.find_all(SORT_BY_NOMBRE)
    except ValueError as e:
        logger.info("Rejected listing request: {}", e)
        return _validation_error([str(e)])
    except DataAccessError as e:
        logger.error("Listing productos failed: {}", e.most_specific_cause)
        return _infra_error(e, status_code=400)


@router.get("/downloadFile/{file_code}", response_model=None)
def download_file(
    file_code: str,
    file_store: FileStoreService = Depends(get_file_store),
) -> FileResponse | JSONResponse:
    """Stream a stored product image by its file code."""
    try:
        path = file_store.find(file_code)
    except StoredFileNotFoundError:
        envelope = ErrorEnvelope(error=f"No se ha encontrado el archivo con código: {file_code}")
        return JSONResponse(status_code=404, content=envelope.to_content())

    original_name = path.name[len(file_code) + 1:]
    return FileResponse(path, filename=original_name)


@router.get("/{producto_id}")
def get_producto(
    producto_id: int,
    service: ProductoService = Depends(get_producto_service),
) -> JSONResponse:
    """Get a product, with its presentation, by id."""
    try:
        producto = service.find_by_id(producto_id)
    except DataAccessError as e:
        logger.error("Lookup of producto {} failed: {}", producto_id, e.most_specific_cause)
        envelope = ErrorEnvelope(error=f"Error grave: {e.most_specific_cause}")
        return JSONResponse(status_code=500, content=envelope.to_content())

    if producto is None:
        envelope = ErrorEnvelope(error=f"No se ha encontrado el producto con id: {producto_id}")
        return JSONResponse(status_code=404, content=envelope.to_content())

    envelope = ProductoEnvelope(
        mensaje=f"Se ha encontrado el producto con id: {producto_id} correctamente",
        producto=producto,
    )
    return JSONResponse(status_code=200, content=envelope.to_content())


@router.post("", status_code=201)
def create_producto(
    producto: str = Form(..., description="Producto as JSON (application/json part)"),
    file: UploadFile | None = File(default=None, description="Product image"),
    service: ProductoService = Depends(get_producto_service),
    file_store: FileStoreService = Depends(get_file_store),
) -> JSONResponse:
    """Create a product from a multipart request, storing its image first."""
    try:
        nuevo = Producto.model_validate_json(producto)
    except ValidationError as e:
        return _validation_error(validation_messages(e.errors()))

    # The image name only ever comes from an upload in this request
    nuevo = nuevo.model_copy(update={"imagen_producto": None})
    stored_name = None
    if file is not None and file.size:
        max_size_mb = get_config().file_store.max_upload_size_mb
        if file.size > max_size_mb * 1024 * 1024:
            return _validation_error(
                [f"El archivo supera el tamaño máximo permitido de {max_size_mb} MB"]
            )
        try:
            file_code = file_store.save_file(file.filename, file.file)
        except FileStoreError as e:
            logger.error("Storing image {} failed: {}", file.filename, e)
            return _infra_error(e)
        stored_name = stored_filename(file_code, file.filename)
        nuevo = nuevo.model_copy(update={"imagen_producto": stored_name})

    try:
        guardado = service.save(nuevo)
    except DataAccessError as e:
        if stored_name is not None:
            # Do not leave an orphan blob behind a failed insert
            try:
                file_store.delete_file(stored_name)
            except FileStoreError:
                logger.exception("Could not remove image {} after failed save", stored_name)
        return _infra_error(e)

    envelope = ProductoEnvelope(mensaje="El producto se ha creado correctamente", producto=guardado)
    return JSONResponse(status_code=201, content=envelope.to_content())


@router.put("/{producto_id}", status_code=201)
def update_producto(
    producto: Producto,
    producto_id: int = Path(..., ge=ID_MIN, le=ID_MAX),
    service: ProductoService = Depends(get_producto_service),
    file_store: FileStoreService = Depends(get_file_store),
) -> JSONResponse:
    """Replace the product stored under ``producto_id``; the path id wins over the body id.

    ``imagenProducto`` may be cleared or kept, but must name a stored image.
    """
    if producto.imagen_producto is not None and not file_store.contains(producto.imagen_producto):
        return _validation_error([f"No existe la imagen: {producto.imagen_producto}"])
    producto = producto.model_copy(update={"id": producto_id})

    try:
        actualizado = service.save(producto)
    except DataAccessError as e:
        return _infra_error(e)

    envelope = ProductoEnvelope(
        mensaje="El producto se ha actualizado correctamente", producto=actualizado
    )
    return JSONResponse(status_code=201, content=envelope.to_content())


@router.delete("/{producto_id}")
def delete_producto(
    producto_id: int,
    service: ProductoService = Depends(get_producto_service),
) -> Response:
    """Delete a product by id. Its stored image, if any, is kept."""
    try:
        producto = service.get(producto_id)
        if producto is None:
            return PlainTextResponse("No existe el producto que quiere borrar.", status_code=404)
        service.delete(producto)
    except DataAccessError as e:
        logger.error("Deleting producto {} failed: {}", producto_id, e.most_specific_cause)
        return Response(status_code=500)

    return PlainTextResponse("Se ha borrado correctamente.", status_code=200)
