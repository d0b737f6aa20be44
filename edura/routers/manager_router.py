# /edura/routers/manager_router.py

from typing import List

from fastapi import APIRouter, Depends, Query

from ..core.deps import Identity, Role, require_role
from ..models import assignment_model
from ..models.manager_model import CompletionReport, ManagerScope
from ..services import assignment_service, report_service
from ..services.scope_service import ScopeResolver, get_scope_resolver
from .responses import unwrap

router = APIRouter()

manager_only = require_role(Role.MANAGER)


@router.get("/scope", response_model=ManagerScope, summary="Get the Manager's Organization Scope")
def get_scope(identity: Identity = Depends(manager_only), resolver: ScopeResolver = Depends(get_scope_resolver)):
    manager_id = identity.user_id
    return ManagerScope(
        teacherIds=sorted(resolver.resolve_teacher_ids(manager_id)),
        studentIds=sorted(resolver.resolve_student_ids(manager_id)),
        classIds=sorted(resolver.resolve_class_ids(manager_id)),
    )


@router.get("/classes/{class_id}/assignments", response_model=List[assignment_model.Assignment], summary="List Assignments of a Class in Scope")
def list_class_assignments(class_id: str, identity: Identity = Depends(manager_only), resolver: ScopeResolver = Depends(get_scope_resolver)):
    return unwrap(assignment_service.list_class_assignments_for_manager(class_id=class_id, manager_id=identity.user_id, resolver=resolver))


@router.get("/reports/completion", response_model=CompletionReport, summary="Get Submitted vs Graded Completion Report")
def get_completion_report(
    months: int = Query(default=report_service.DEFAULT_MONTHS, ge=1, le=report_service.MAX_MONTHS),
    identity: Identity = Depends(manager_only),
    resolver: ScopeResolver = Depends(get_scope_resolver),
):
    return report_service.build_completion_report(manager_id=identity.user_id, resolver=resolver, months=months)
