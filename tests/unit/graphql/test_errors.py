"""Tests for catalog error translation."""

import pytest
from graphql import GraphQLError

from folio.core.errors import BadInputError, InternalError, NotFoundError
from folio.graphql.errors import catalog_errors, should_mask_error, to_graphql_error


class TestToGraphqlError:
    """Test error code mapping."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (BadInputError("Invalid ISBN"), "BAD_USER_INPUT"),
            (NotFoundError("Book", "x"), "NOT_FOUND"),
            (InternalError("Could not add book"), "INTERNAL_SERVER_ERROR"),
        ],
    )
    def test_codes(self, error, code: str) -> None:
        converted = to_graphql_error(error)

        assert converted.message == error.message
        assert converted.extensions == {"code": code}

    def test_context_manager_reraises(self) -> None:
        with pytest.raises(GraphQLError) as exc_info:
            with catalog_errors():
                raise NotFoundError("Author", "a1")

        assert exc_info.value.extensions == {"code": "NOT_FOUND"}
        assert isinstance(exc_info.value.__cause__, NotFoundError)

    def test_other_exceptions_pass_through(self) -> None:
        with pytest.raises(KeyError):
            with catalog_errors():
                raise KeyError("x")


class TestShouldMaskError:
    """Test the masking predicate."""

    def test_validation_error(self) -> None:
        assert should_mask_error(GraphQLError("Cannot query field")) is False

    def test_coded_error(self) -> None:
        coded = to_graphql_error(BadInputError("Invalid DOB"))
        located = GraphQLError(coded.message, original_error=coded)

        assert should_mask_error(located) is False

    def test_unexpected_error(self) -> None:
        located = GraphQLError("boom", original_error=RuntimeError("boom"))

        assert should_mask_error(located) is True
