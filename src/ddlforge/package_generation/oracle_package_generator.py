"""
Oracle CRUD Package Generator
=============================

Purpose:
--------
Emits a PL/SQL package (specification and body) implementing create,
update, delete, get and paginated list operations for one table.

Public Interface:
-----------------
    def generate_package(table, options=None) -> str
    def generate_package_specification(table, options=None, name=None) -> str
    def generate_package_body(table, options=None, name=None) -> str
    def generate_package_components(table, options=None) -> PackageComponents
    def package_name(table_name, options=None) -> str

Generated Code Contract:
------------------------
- Responses are JSON envelopes built by the external utility package
  (``p_utilities`` by default); the generator only emits calls to it.
- ``-20002`` is the "not found" signal raised by the generated code,
  ``-20001`` is reserved for validation failures.
- ``create_record`` computes a numeric surrogate key as MAX(pk) + 1.
  This is not safe under concurrent inserts against a live database.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..schema_model import (
    AuditColumnNames,
    FieldDef,
    GenerationError,
    PackageOptions,
    TableDef,
    resolve_package_options,
)
from ..script_generation import inject_audit_columns, is_audit_column
from ..script_generation.oracle_dialect import (
    ORACLE,
    ORACLE_CURRENT_TIMESTAMP,
    ORACLE_TIMESTAMP_TYPE,
)
from .utility_contract import SEARCH_PARTIAL, UtilityOperation


# =============================================================================
# EXCEPTIONS
# =============================================================================

class PackageGenerationError(GenerationError):
    """Raised when a table cannot be turned into a CRUD package."""
    pass


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
DEFAULT_SORT_ORDER = "ASC"

NOT_FOUND_CODE = -20002
VALIDATION_CODE = -20001

ISO_TIMESTAMP_FORMAT = 'YYYY-MM-DD"T"HH24:MI:SS"Z"'

# SQLCODE -> (message expression, HTTP status). Evaluated in order; every
# other code maps to FALLBACK_ERROR.
ERROR_MAPPINGS: list[tuple[int, str, int]] = [
    (-1, "'Record already exists'", 409),
    (NOT_FOUND_CODE, "'Record not found'", 404),
    (VALIDATION_CODE, "'Validation failed: ' || SQLERRM", 400),
]
FALLBACK_ERROR = ("'Record operation failed: ' || SQLERRM", 500)

RAW_ERROR_RETURN = "RETURN '{\"status\":\"error\",\"message\":\"' || SQLERRM || '\"}';"

# A type is searchable when it contains one of these (covers VARCHAR2,
# NVARCHAR2, CHAR, NCHAR, CLOB, NCLOB).
SEARCHABLE_TYPE_MARKERS = ("CHAR", "CLOB")
NUMERIC_KEY_MARKERS = ("NUMBER", "INTEGER")


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class PackageComponents:
    """The generated specification and body, plus the combined text."""
    package_name: str
    specification: str
    body: str

    @property
    def complete(self) -> str:
        terminator = ORACLE.block_terminator
        return f"{self.specification}\n{terminator}\n{self.body}\n{terminator}"


@dataclass
class _TableShape:
    """Field partitions derived once per table."""
    table: TableDef
    fields: tuple[FieldDef, ...]
    pk_fields: list[FieldDef]
    non_pk_fields: list[FieldDef]
    searchable_fields: list[FieldDef]
    created_at: Optional[FieldDef]
    updated_at: Optional[FieldDef]

    @property
    def first_pk(self) -> FieldDef:
        return self.pk_fields[0]

    @property
    def generated_key(self) -> Optional[FieldDef]:
        """The key create_record fills in itself; composite keys are caller-supplied."""
        return self.pk_fields[0] if len(self.pk_fields) == 1 else None

    @property
    def create_fields(self) -> list[FieldDef]:
        if self.generated_key is None:
            return self.pk_fields + self.non_pk_fields
        return self.non_pk_fields


# =============================================================================
# INTERNAL HELPERS
# =============================================================================

def _param(field: FieldDef) -> str:
    return f"p_{field.name.lower()}"


def _local(field: FieldDef) -> str:
    return f"l_{field.name.lower()}"


def _anchored_params(table: TableDef, fields: list[FieldDef], suffix=lambda f: "") -> list[str]:
    return [
        f"      {_param(f)} IN {table.name}.{f.name}%TYPE{suffix(f)}"
        for f in fields
    ]


def _signature(kind: str, name: str, params: list[str], tail: str) -> list[str]:
    """``FUNCTION name (params) tail`` with the parameter list on its own lines."""
    if not params:
        return [f"   {kind} {name} {tail}"]
    return [f"   {kind} {name} (", ",\n".join(params), f"   ) {tail}"]


def _pk_where(pk_fields: list[FieldDef], indent: str = "       ") -> str:
    conditions = " AND ".join(f"{pk.name} = {_param(pk)}" for pk in pk_fields)
    return f"{indent}WHERE {conditions};"


def _doc_block(text: str) -> list[str]:
    return ["   /**", f"   * {text}", "   */"]


def _exception_block(options: PackageOptions, cleanup: Optional[list[str]] = None) -> list[str]:
    lines = ["   EXCEPTION", "      WHEN OTHERS THEN"]
    lines.extend(cleanup or [])
    if options.include_exception_handling:
        lines.append("         RETURN handle_all_exceptions;")
    else:
        lines.append(f"         {RAW_ERROR_RETURN}")
    return lines


def _build_response(utility: str, status: str, http_status: int, message: str, data: str) -> list[str]:
    return [
        f"      RETURN {utility}.{UtilityOperation.BUILD_RESPONSE.value}(",
        f"         p_status      => '{status}',",
        f"         p_http_status => {http_status},",
        f"         p_message     => '{message}',",
        f"         p_data        => {data}",
        "      );",
    ]


def _is_searchable(field: FieldDef) -> bool:
    data_type = field.type.upper()
    return any(marker in data_type for marker in SEARCHABLE_TYPE_MARKERS)


def _is_numeric_key(field: FieldDef) -> bool:
    data_type = field.type.upper()
    return any(marker in data_type for marker in NUMERIC_KEY_MARKERS)


def _find_audit_field(fields: tuple[FieldDef, ...], names: AuditColumnNames, column: str) -> Optional[FieldDef]:
    for field in fields:
        if is_audit_column(field, names, column):
            return field
    return None


def _shape(table: TableDef, options: PackageOptions) -> _TableShape:
    fields = table.fields
    if options.include_audit_columns:
        fields = inject_audit_columns(
            fields,
            options.audit_column_names,
            ORACLE_TIMESTAMP_TYPE,
            ORACLE_CURRENT_TIMESTAMP,
        )

    pk_fields = [f for f in fields if f.is_primary_key]
    if not pk_fields:
        raise PackageGenerationError(
            f'Table "{table.name}" has no primary key; cannot generate a CRUD package'
        )

    names = options.audit_column_names
    return _TableShape(
        table=table,
        fields=fields,
        pk_fields=pk_fields,
        non_pk_fields=[f for f in fields if not f.is_primary_key],
        searchable_fields=[f for f in fields if _is_searchable(f)] if options.include_search else [],
        created_at=_find_audit_field(fields, names, "created_at"),
        updated_at=_find_audit_field(fields, names, "updated_at"),
    )


def _needs_record_object(options: PackageOptions) -> bool:
    # get_records resolves every key through get_record_object
    return options.include_json_support or options.include_pagination


# =============================================================================
# SPECIFICATION
# =============================================================================

def _specification(shape: _TableShape, options: PackageOptions, name: str) -> str:
    table = shape.table
    lines = [f"CREATE OR REPLACE PACKAGE {name} AS", ""]

    for comment, function, fields in (
        ("Create a new record", "create_record", shape.create_fields),
        ("Update an existing record", "update_record", list(shape.fields)),
        ("Delete a record", "delete_record", shape.pk_fields),
        ("Get a single record", "get_record", shape.pk_fields),
    ):
        lines.append(f"   -- {comment}")
        lines.extend(_signature("FUNCTION", function, _anchored_params(table, fields), "RETURN CLOB;"))
        lines.append("")

    if options.include_pagination:
        lines.append("   -- Get multiple records with pagination, sorting, and filtering")
        lines.extend(_signature("FUNCTION", "get_records", _list_params(shape), "RETURN CLOB;"))
        lines.append("")

    lines.append(f"END {name};")
    return "\n".join(lines)


def _list_params(shape: _TableShape) -> list[str]:
    return [
        f"      p_page        IN NUMBER DEFAULT {DEFAULT_PAGE}",
        f"      p_page_size   IN NUMBER DEFAULT {DEFAULT_PAGE_SIZE}",
        f"      p_sort_by     IN VARCHAR2 DEFAULT '{shape.first_pk.name.lower()}'",
        f"      p_sort_order  IN VARCHAR2 DEFAULT '{DEFAULT_SORT_ORDER}'",
        "      p_query       IN VARCHAR2 DEFAULT NULL",
        f"      p_search_type IN VARCHAR2 DEFAULT '{SEARCH_PARTIAL}'",
    ]


# =============================================================================
# BODY: HELPERS
# =============================================================================

def _constants(shape: _TableShape) -> list[str]:
    sort_columns = ",".join(f.name.lower() for f in shape.fields)
    lines = [
        "   -- Valid sortable columns for records",
        f"   c_valid_sort_columns CONSTANT VARCHAR2(500) := '{sort_columns}';",
    ]
    if shape.searchable_fields:
        searchable = ",".join(f.name.lower() for f in shape.searchable_fields)
        lines.append("   -- Searchable fields for records")
        lines.append(f"   c_searchable_fields  CONSTANT VARCHAR2(500) := '{searchable}';")
    lines.append("")
    return lines


def _validation_procedure(shape: _TableShape) -> list[str]:
    table = shape.table
    params = _anchored_params(
        table, list(shape.fields),
        suffix=lambda f: " DEFAULT NULL" if f.is_primary_key else "",
    )
    lines = _doc_block("Validates data before create or update operations")
    lines.extend(_signature("PROCEDURE", "validate_data", params, "IS"))
    lines.append("      l_existing_count NUMBER;")
    lines.append("   BEGIN")

    # The record's own key must exist when one is supplied (update)
    pk_present = " AND ".join(f"{_param(pk)} IS NOT NULL" for pk in shape.pk_fields)
    lines.extend([
        f"      IF {pk_present} THEN",
        "         SELECT COUNT(*)",
        "           INTO l_existing_count",
        f"           FROM {table.name}",
        _pk_where(shape.pk_fields, indent="          "),
        "         IF l_existing_count = 0 THEN",
        "            RAISE_APPLICATION_ERROR(",
        f"               {NOT_FOUND_CODE},",
        "               'Record with the specified primary key does not exist'",
        "            );",
        "         END IF;",
        "      END IF;",
    ])

    # Every supplied foreign key must resolve in its referenced table
    for field in shape.fields:
        ref = field.foreign_key
        if ref is None:
            continue
        lines.extend([
            f"      IF {_param(field)} IS NOT NULL THEN",
            "         SELECT COUNT(*)",
            "           INTO l_existing_count",
            f"           FROM {ref.referenced_table}",
            f"          WHERE {ref.referenced_column} = {_param(field)};",
            "         IF l_existing_count = 0 THEN",
            "            RAISE_APPLICATION_ERROR(",
            f"               {NOT_FOUND_CODE},",
            f"               'Referenced {ref.referenced_table} record not found'",
            "            );",
            "         END IF;",
            "      END IF;",
        ])

    lines.extend([
        "      -- Add further business rules here, e.g.",
        f"      -- RAISE_APPLICATION_ERROR({VALIDATION_CODE}, 'Validation error message');",
        "      NULL;",
        "   END validate_data;",
    ])
    return lines


def _exception_handler(options: PackageOptions) -> list[str]:
    utility = options.utility_package
    build_response = UtilityOperation.BUILD_RESPONSE.value

    def response(message: str, status: int) -> list[str]:
        return [
            f"            RETURN {utility}.{build_response}(",
            "               p_status      => 'error',",
            f"               p_message     => {message},",
            "               p_data        => NULL,",
            f"               p_http_status => {status}",
            "            );",
        ]

    lines = _doc_block("Handles all exceptions and returns standardized error response")
    lines.extend([
        "   FUNCTION handle_all_exceptions RETURN CLOB IS",
        "   BEGIN",
        "      CASE SQLCODE",
    ])
    for code, message, status in ERROR_MAPPINGS:
        lines.append(f"         WHEN {code} THEN")
        lines.extend(response(message, status))
    lines.append("         ELSE")
    lines.extend(response(*FALLBACK_ERROR))
    lines.extend([
        "      END CASE;",
        "   END handle_all_exceptions;",
    ])
    return lines


def _record_object_function(shape: _TableShape) -> list[str]:
    table = shape.table
    lines = _doc_block("Creates a JSON object for a single record")
    lines.extend(_signature(
        "FUNCTION", "get_record_object",
        _anchored_params(table, shape.pk_fields), "RETURN JSON_OBJECT_T IS",
    ))
    lines.extend([
        "      l_count       NUMBER;",
        f"      l_record      {table.name}%ROWTYPE;",
        "      l_json_record JSON_OBJECT_T := JSON_OBJECT_T();",
        "   BEGIN",
        "      SELECT COUNT(*)",
        "        INTO l_count",
        f"        FROM {table.name}",
        _pk_where(shape.pk_fields),
        "      IF l_count = 0 THEN",
        "         RAISE_APPLICATION_ERROR(",
        f"            {NOT_FOUND_CODE},",
        "            'Record not found'",
        "         );",
        "      END IF;",
        "      SELECT " + ",\n             ".join(f.name for f in shape.fields),
        "        INTO l_record",
        f"        FROM {table.name}",
        _pk_where(shape.pk_fields),
    ])

    for field in shape.fields:
        lines.append("      l_json_record.put(")
        lines.append(f"         '{field.name.lower()}',")
        if "TIMESTAMP" in field.type.upper():
            lines.extend([
                "         TO_CHAR(",
                f"            l_record.{field.name},",
                f"            '{ISO_TIMESTAMP_FORMAT}'",
                "         )",
            ])
        else:
            lines.append(f"         l_record.{field.name}")
        lines.append("      );")

    lines.extend([
        "      RETURN l_json_record;",
        "   END get_record_object;",
    ])
    return lines


# =============================================================================
# BODY: CRUD OPERATIONS
# =============================================================================

def _validate_call(fields: list[FieldDef]) -> list[str]:
    if not fields:
        return ["      validate_data;"]
    args = [f"         {_param(f)} => {_param(f)}" for f in fields]
    return ["      validate_data(", ",\n".join(args), "      );"]


def _create_function(shape: _TableShape, options: PackageOptions) -> list[str]:
    table = shape.table
    pk = shape.generated_key
    numeric_key = pk is not None and _is_numeric_key(pk)

    lines = _doc_block("Creates a new record")
    lines.extend(_signature(
        "FUNCTION", "create_record",
        _anchored_params(table, shape.create_fields), "RETURN CLOB IS",
    ))
    if pk is not None:
        lines.append(f"      {_local(pk)}   {table.name}.{pk.name}%TYPE;")
    if options.include_json_support:
        lines.append("      l_data JSON_OBJECT_T;")
    lines.append("   BEGIN")

    if options.include_validation:
        lines.extend(_validate_call(shape.non_pk_fields))

    if numeric_key:
        lines.extend([
            "      SELECT NVL(",
            f"         MAX({pk.name}),",
            "         0",
            "      ) + 1",
            f"        INTO {_local(pk)}",
            f"        FROM {table.name};",
            "",
        ])

    # updated_at is only ever set by update_record
    inserted = [f for f in shape.create_fields if f is not shape.updated_at]
    columns = [f.name for f in inserted]
    values = []
    for field in inserted:
        if field is shape.created_at:
            values.append(f"NVL({_param(field)}, {ORACLE_CURRENT_TIMESTAMP})")
        else:
            values.append(_param(field))
    if numeric_key:
        columns.insert(0, pk.name)
        values.insert(0, _local(pk))

    if pk is None:
        insert_end = " )"
        keys = ", ".join(_param(f) for f in shape.pk_fields)
    elif numeric_key:
        insert_end = " )"
        keys = _local(pk)
    else:
        insert_end = f" )\n      RETURNING {pk.name} INTO {_local(pk)}"
        keys = _local(pk)

    lines.append(f"      INSERT INTO {table.name} (")
    lines.append("         " + ",\n         ".join(columns))
    lines.append("      ) VALUES ( " + ",\n                 ".join(values) + insert_end + ";")

    if options.include_json_support:
        lines.append(f"      l_data := get_record_object({keys});")
        lines.extend(_build_response(
            options.utility_package, "success", 201, "Record created successfully", "l_data"
        ))
    else:
        lines.append("      RETURN '{\"status\":\"success\",\"message\":\"Record created successfully\"}';")

    lines.append("")
    lines.extend(_exception_block(options))
    lines.append("   END create_record;")
    return lines


def _update_function(shape: _TableShape, options: PackageOptions) -> list[str]:
    table = shape.table
    lines = _doc_block("Updates an existing record")
    lines.extend(_signature(
        "FUNCTION", "update_record",
        _anchored_params(table, list(shape.fields)), "RETURN CLOB IS",
    ))
    if options.include_json_support:
        lines.append("      l_data JSON_OBJECT_T;")
    lines.append("   BEGIN")

    if options.include_validation:
        lines.extend(_validate_call(list(shape.fields)))

    assignments = [
        f"{f.name} = {_param(f)}"
        for f in shape.non_pk_fields if f is not shape.updated_at
    ]
    if shape.updated_at is not None:
        assignments.append(f"{shape.updated_at.name} = {ORACLE_CURRENT_TIMESTAMP}")
    if not assignments:
        assignments = [f"{shape.first_pk.name} = {_param(shape.first_pk)}"]

    lines.append(f"      UPDATE {table.name}")
    lines.append("         SET " + ",\n             ".join(assignments))
    lines.append(_pk_where(shape.pk_fields))

    if options.include_json_support:
        keys = ", ".join(_param(pk) for pk in shape.pk_fields)
        lines.append(f"      l_data := get_record_object({keys});")
        lines.extend(_build_response(
            options.utility_package, "success", 200, "Record updated successfully", "l_data"
        ))
    else:
        lines.append("      RETURN '{\"status\":\"success\",\"message\":\"Record updated successfully\"}';")

    lines.extend(_exception_block(options))
    lines.append("   END update_record;")
    return lines


def _delete_function(shape: _TableShape, options: PackageOptions) -> list[str]:
    table = shape.table
    lines = _doc_block("Deletes a record")
    lines.extend(_signature(
        "FUNCTION", "delete_record",
        _anchored_params(table, shape.pk_fields), "RETURN CLOB IS",
    ))
    lines.append("      l_count    NUMBER;")
    if options.include_json_support:
        lines.append("      l_response JSON_OBJECT_T;")
    lines.extend([
        "   BEGIN",
        "      SELECT COUNT(*)",
        "        INTO l_count",
        f"        FROM {table.name}",
        _pk_where(shape.pk_fields),
        "      IF l_count = 0 THEN",
        "         RAISE_APPLICATION_ERROR(",
        f"            {NOT_FOUND_CODE},",
        "            'Record not found for deletion'",
        "         );",
        "      END IF;",
        f"      DELETE FROM {table.name}",
        _pk_where(shape.pk_fields),
    ])

    if options.include_json_support:
        lines.append("      -- Build deleted record response")
        lines.append("      l_response := JSON_OBJECT_T();")
        for pk in shape.pk_fields:
            lines.extend([
                "      l_response.put(",
                f"         'deleted_{pk.name.lower()}',",
                f"         {_param(pk)}",
                "      );",
            ])
        lines.extend(_build_response(
            options.utility_package, "success", 200, "Record deleted successfully", "l_response"
        ))
    else:
        lines.append("      RETURN '{\"status\":\"success\",\"message\":\"Record deleted successfully\"}';")

    lines.extend(_exception_block(options))
    lines.append("   END delete_record;")
    return lines


def _get_record_function(shape: _TableShape, options: PackageOptions) -> list[str]:
    table = shape.table
    lines = _doc_block("Retrieves a single record")
    lines.extend(_signature(
        "FUNCTION", "get_record",
        _anchored_params(table, shape.pk_fields), "RETURN CLOB IS",
    ))

    if options.include_json_support:
        keys = ", ".join(_param(pk) for pk in shape.pk_fields)
        lines.extend([
            "      l_data JSON_OBJECT_T;",
            "   BEGIN",
            f"      l_data := get_record_object({keys});",
        ])
        lines.extend(_build_response(
            options.utility_package, "success", 200, "Record retrieved successfully", "l_data"
        ))
    else:
        lines.extend([
            "      l_count NUMBER;",
            "   BEGIN",
            "      SELECT COUNT(*)",
            "        INTO l_count",
            f"        FROM {table.name}",
            _pk_where(shape.pk_fields),
            "      IF l_count = 0 THEN",
            "         RAISE_APPLICATION_ERROR(",
            f"            {NOT_FOUND_CODE},",
            "            'Record not found'",
            "         );",
            "      END IF;",
            "      RETURN '{\"status\":\"success\",\"message\":\"Record retrieved\"}';",
        ])

    lines.extend(_exception_block(options))
    lines.append("   END get_record;")
    return lines


def _get_records_function(shape: _TableShape, options: PackageOptions) -> list[str]:
    table = shape.table
    utility = options.utility_package
    key_vars = [f"v_{pk.name.lower()}" for pk in shape.pk_fields]
    key_columns = ", ".join(pk.name for pk in shape.pk_fields)
    key_list = ", ".join(key_vars)

    lines = _doc_block("Retrieves multiple records with pagination, sorting, and filtering")
    lines.extend(_signature("FUNCTION", "get_records", _list_params(shape), "RETURN CLOB IS"))
    lines.extend([
        "      v_total_count      NUMBER;",
        "      v_offset           NUMBER;",
        "      v_valid_page       NUMBER;",
        "      v_valid_size       NUMBER;",
        "      v_limit            NUMBER;",
        "      v_total_pages      NUMBER;",
        "      v_data             JSON_ARRAY_T := JSON_ARRAY_T();",
        "      v_record_data      JSON_OBJECT_T;",
        "      v_valid_sort_by    VARCHAR2(50);",
        "      v_valid_sort_order VARCHAR2(10);",
        "      v_sort_clause      VARCHAR2(100);",
        "      v_where_clause     VARCHAR2(1000);",
        "      v_sql              VARCHAR2(4000);",
        "",
        "      TYPE t_cursor IS REF CURSOR;",
        "      c_records          t_cursor;",
        "",
        "      -- Only the key is fetched; get_record_object loads the rest",
    ])
    lines.extend(
        f"      {var.ljust(18)} {table.name}.{pk.name}%TYPE;"
        for var, pk in zip(key_vars, shape.pk_fields)
    )
    lines.extend([
        "   BEGIN",
        f"      {utility}.{UtilityOperation.VALIDATE_PAGINATION.value}(",
        "         p_page       => p_page,",
        "         p_page_size  => p_page_size,",
        "         p_valid_page => v_valid_page,",
        "         p_valid_size => v_valid_size,",
        "         p_offset     => v_offset,",
        "         p_limit      => v_limit",
        "      );",
        "",
        f"      {utility}.{UtilityOperation.VALIDATE_SORTING.value}(",
        "         p_sort_by          => p_sort_by,",
        "         p_sort_order       => p_sort_order,",
        "         p_valid_columns    => c_valid_sort_columns,",
        "         p_valid_sort_by    => v_valid_sort_by,",
        "         p_valid_sort_order => v_valid_sort_order,",
        "         p_sort_clause      => v_sort_clause",
        "      );",
    ])

    if shape.searchable_fields:
        lines.extend([
            "      -- Search values are embedded in the clause, quotes doubled",
            f"      v_where_clause := {utility}.{UtilityOperation.BUILD_WHERE_CLAUSE.value}(",
            "         p_query             => p_query,",
            "         p_search_type       => p_search_type,",
            "         p_searchable_fields => c_searchable_fields",
            "      );",
        ])
    else:
        lines.append("      v_where_clause := '1=1';")

    lines.extend([
        "",
        f"      v_sql := 'SELECT COUNT(*) FROM {table.name} WHERE ' || v_where_clause;",
        "      EXECUTE IMMEDIATE v_sql",
        "        INTO v_total_count;",
        "",
        "      v_total_pages := CEIL(v_total_count / v_valid_size);",
        "",
        f"      v_sql := 'SELECT {key_columns} FROM {table.name} '",
        "               || 'WHERE '",
        "               || v_where_clause",
        "               || ' '",
        "               || 'ORDER BY '",
        "               || v_sort_clause",
        "               || ' '",
        "               || 'OFFSET :offset ROWS FETCH NEXT :page_size ROWS ONLY';",
        "      OPEN c_records FOR v_sql",
        "         USING v_offset, v_valid_size;",
        "",
        "      LOOP",
        f"         FETCH c_records INTO {key_list};",
        "         EXIT WHEN c_records%NOTFOUND;",
        f"         v_record_data := get_record_object({key_list});",
        "         v_data.append(v_record_data);",
        "      END LOOP;",
        "",
        "      CLOSE c_records;",
        "",
        f"      RETURN {utility}.{UtilityOperation.BUILD_PAGINATED_RESPONSE.value}(",
        f"         p_entity_name        => '{table.name}',",
        "         p_status             => 'success',",
        "         p_http_status        => 200,",
        "         p_page               => v_valid_page,",
        "         p_page_size          => v_valid_size,",
        "         p_sort_by            => v_valid_sort_by,",
        "         p_sort_order         => v_valid_sort_order,",
        "         p_query              => p_query,",
        "         p_search_type        => p_search_type,",
    ])

    if shape.searchable_fields:
        lines.extend([
            "         p_search_columns     => JSON_ARRAY_T('[\"'",
            "                                 || REPLACE(",
            "            c_searchable_fields,",
            "            ',',",
            "            '\", \"'",
            "         ) || '\"]'),",
        ])
    else:
        lines.append("         p_search_columns     => JSON_ARRAY_T('[]'),")

    lines.extend([
        "         p_data_array         => v_data,",
        "         p_total_records      => v_total_count,",
        "         p_total_pages        => v_total_pages,",
        "         p_additional_filters => NULL",
        "      );",
    ])
    lines.extend(_exception_block(options, cleanup=[
        "         IF c_records%ISOPEN THEN",
        "            CLOSE c_records;",
        "         END IF;",
    ]))
    lines.append("   END get_records;")
    return lines


def _body(shape: _TableShape, options: PackageOptions, name: str) -> str:
    lines = [f"CREATE OR REPLACE PACKAGE BODY {name} AS", ""]

    if options.include_pagination:
        lines.extend(_constants(shape))

    helpers = []
    if options.include_validation:
        helpers.append(_validation_procedure(shape))
    if options.include_exception_handling:
        helpers.append(_exception_handler(options))
    if _needs_record_object(options):
        helpers.append(_record_object_function(shape))

    operations = [
        _create_function(shape, options),
        _update_function(shape, options),
        _delete_function(shape, options),
        _get_record_function(shape, options),
    ]
    if options.include_pagination:
        operations.append(_get_records_function(shape, options))

    for block in helpers + operations:
        lines.extend(block)
        lines.append("")

    lines.append(f"END {name};")
    return "\n".join(lines)


# =============================================================================
# PUBLIC INTERFACE
# =============================================================================

OptionsInput = Union[PackageOptions, dict[str, Any], None]


def package_name(table_name: str, options: OptionsInput = None) -> str:
    """Package name: configured prefix plus the lower-cased table name."""
    return f"{resolve_package_options(options).package_prefix}{table_name.lower()}"


def sortable_columns(table: TableDef, options: OptionsInput = None) -> list[str]:
    """Lower-cased column names get_records accepts as sort keys."""
    shape = _shape(table, resolve_package_options(options))
    return [f.name.lower() for f in shape.fields]


def searchable_columns(table: TableDef, options: OptionsInput = None) -> list[str]:
    """Lower-cased column names get_records searches; empty when search is off."""
    shape = _shape(table, resolve_package_options(options))
    return [f.name.lower() for f in shape.searchable_fields]


def generate_package_specification(
    table: TableDef,
    options: OptionsInput = None,
    name: Optional[str] = None,
) -> str:
    """
    Generate the package specification (operation signatures).

    Raises:
        PackageGenerationError: If the table has no primary key.
    """
    resolved = resolve_package_options(options)
    name = name or package_name(table.name, resolved)
    return _specification(_shape(table, resolved), resolved, name)


def generate_package_body(
    table: TableDef,
    options: OptionsInput = None,
    name: Optional[str] = None,
) -> str:
    """
    Generate the package body (implementations).

    Raises:
        PackageGenerationError: If the table has no primary key.
    """
    resolved = resolve_package_options(options)
    name = name or package_name(table.name, resolved)
    return _body(_shape(table, resolved), resolved, name)


def generate_package_components(table: TableDef, options: OptionsInput = None) -> PackageComponents:
    resolved = resolve_package_options(options)
    name = package_name(table.name, resolved)
    shape = _shape(table, resolved)
    return PackageComponents(
        package_name=name,
        specification=_specification(shape, resolved, name),
        body=_body(shape, resolved, name),
    )


def generate_package(table: TableDef, options: OptionsInput = None) -> str:
    """
    Generate the complete package: specification, ``/``, body, ``/``.

    Args:
        table: Table to generate CRUD operations for.
        options: Package options (model, dict or None for defaults).

    Returns:
        PL/SQL source text.

    Raises:
        PackageGenerationError: If the table has no primary key.
    """
    return generate_package_components(table, options).complete
