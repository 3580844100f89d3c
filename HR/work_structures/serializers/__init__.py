from .catalog_serializers import (
    DepartmentReadSerializer,
    DepartmentCreateSerializer,
    DepartmentUpdateSerializer,
    DesignationReadSerializer,
    DesignationCreateSerializer,
    DesignationUpdateSerializer,
    WorkShiftReadSerializer,
    WorkShiftCreateSerializer,
    WorkShiftUpdateSerializer,
)
