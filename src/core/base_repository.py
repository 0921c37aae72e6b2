"""
Base repository for data access.

Keeps business logic away from the Django ORM: services talk to
repositories, repositories talk to models.

Principles:
- Single Responsibility: data access only
- Dependency Inversion: services depend on the repository, not on the ORM
- Reusability: shared methods for every repository
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from django.db.models import Model, QuerySet

ModelType = TypeVar("ModelType", bound=Model)


class BaseRepository(Generic[ModelType]):
    """
    Base class for Django ORM repositories.

    Example:
        class NormUurRepository(BaseRepository[NormUur]):
            model = NormUur

            def for_company(self, company) -> QuerySet[NormUur]:
                return self.get_queryset(filters={"company": company})
    """

    model: Type[ModelType] = None

    def __init__(self):
        if self.model is None:
            raise ValueError(
                f"{self.__class__.__name__} must define the 'model' attribute"
            )

    def get_by_id(
        self,
        obj_id: int,
        select_related: Optional[List[str]] = None,
    ) -> Optional[ModelType]:
        """
        Fetch an object by primary key.

        Args:
            obj_id: primary key
            select_related: relations to join in the same query

        Returns:
            The model instance or None
        """
        qs = self.model.objects.all()

        if select_related:
            qs = qs.select_related(*select_related)

        return qs.filter(pk=obj_id).first()

    def get_queryset(
        self,
        filters: Optional[Dict[str, Any]] = None,
        select_related: Optional[List[str]] = None,
        order_by: Optional[List[str]] = None,
    ) -> QuerySet[ModelType]:
        """
        Build a filtered, ordered QuerySet.

        Args:
            filters: keyword filters for QuerySet.filter(**filters)
            select_related: relations to join in the same query
            order_by: ordering fields

        Returns:
            QuerySet of the model
        """
        qs = self.model.objects.all()

        if filters:
            qs = qs.filter(**filters)

        if select_related:
            qs = qs.select_related(*select_related)

        if order_by:
            qs = qs.order_by(*order_by)

        return qs

    def create(self, **fields) -> ModelType:
        return self.model.objects.create(**fields)

    def bulk_create(self, instances: List[ModelType]) -> List[ModelType]:
        return self.model.objects.bulk_create(instances)
