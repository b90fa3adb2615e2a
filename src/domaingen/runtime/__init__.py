from domaingen.runtime.contracts import (
    CreateRequest,
    DomainModel,
    QueryParams,
    UpdateRequest,
    check_required,
)
from domaingen.runtime.cursor import (
    Cursor,
    InvalidCursorError,
    PageInfo,
    build_page_info,
    decode_cursor,
    encode_cursor,
)
from domaingen.runtime.errors import (
    DomainError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
    EntityValidationError,
    InvalidIDError,
    ServiceError,
    is_already_exists,
    is_not_found,
    is_validation,
)
from domaingen.runtime.ids import ID, Int64ID, StringID, new_id_from_int64, new_id_from_string
from domaingen.runtime.requests import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, ListRequest, SearchRequest, SortOrder
from domaingen.runtime.service import BaseGenericDomainService, Converters

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "ID",
    "MAX_PAGE_SIZE",
    "BaseGenericDomainService",
    "Converters",
    "CreateRequest",
    "Cursor",
    "DomainError",
    "DomainModel",
    "EntityAlreadyExistsError",
    "EntityNotFoundError",
    "EntityValidationError",
    "Int64ID",
    "InvalidCursorError",
    "InvalidIDError",
    "ListRequest",
    "PageInfo",
    "QueryParams",
    "SearchRequest",
    "ServiceError",
    "SortOrder",
    "StringID",
    "UpdateRequest",
    "build_page_info",
    "check_required",
    "decode_cursor",
    "encode_cursor",
    "is_already_exists",
    "is_not_found",
    "is_validation",
    "new_id_from_int64",
    "new_id_from_string",
]
