from fastapi import APIRouter, Depends, Query, Request, Response, status
from typing import Optional

from string_analyzer import schemas
from string_analyzer.service import StringService

router = APIRouter()


def get_service(request: Request) -> StringService:
    """Dependency to provide the service built at startup."""
    return request.app.state.service


@router.post("/strings", response_model=schemas.StringResponse, status_code=status.HTTP_201_CREATED)
def create_string(
    string_data: Optional[schemas.StringCreate] = None,
    service: StringService = Depends(get_service),
):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    value = string_data.value if string_data is not None else None
    record = service.submit_value(value)
    return schemas.StringResponse.from_record(record)


@router.get("/strings", response_model=schemas.StringListResponse)
def get_all_strings(
    is_palindrome: Optional[str] = Query(None, description="true or false"),
    min_length: Optional[str] = Query(None, description="Minimum length (inclusive)"),
    max_length: Optional[str] = Query(None, description="Maximum length (inclusive)"),
    word_count: Optional[str] = Query(None, description="Exact word count"),
    contains_character: Optional[str] = Query(None, description="A single character"),
    service: StringService = Depends(get_service),
):
    """
    Get all strings with optional filtering.
    Parameters are taken as text so malformed values surface as InvalidFilterValue.
    """
    records, filters_applied = service.list({
        "is_palindrome": is_palindrome,
        "min_length": min_length,
        "max_length": max_length,
        "word_count": word_count,
        "contains_character": contains_character,
    })
    data = [schemas.StringResponse.from_record(r) for r in records]
    return schemas.StringListResponse(data=data, count=len(data), filters_applied=filters_applied)


# Must be registered before /strings/{string_value:path}
@router.get("/strings/filter-by-natural-language", response_model=schemas.NaturalLanguageResponse)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="Natural language query"),
    service: StringService = Depends(get_service),
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    records, original, parsed_filters = service.list_by_text(query)
    data = [schemas.StringResponse.from_record(r) for r in records]
    return schemas.NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=schemas.InterpretedQuery(original=original, parsed_filters=parsed_filters),
    )


@router.get("/strings/{string_value:path}", response_model=schemas.StringResponse)
def get_string(string_value: str, service: StringService = Depends(get_service)):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    return schemas.StringResponse.from_record(service.fetch(string_value))


@router.delete("/strings/{string_value:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, service: StringService = Depends(get_service)):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    service.remove(string_value)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
