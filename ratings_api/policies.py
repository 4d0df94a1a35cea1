"""
Reglas de autorización.

Funciones puras sobre (AuthContext, recurso): no tocan la base ni lanzan
excepciones. Los routers deciden qué error devolver cuando dan False.
"""

from ratings_api.security import AuthContext


def can_read_branch(ctx: AuthContext, branch_id: int) -> bool:
    return ctx.is_super_admin or branch_id in ctx.branch_ids


def can_write_employee(ctx: AuthContext, current_branch_id: int, target_branch_id: int) -> bool:
    # Alcanza con estar autorizado en la sucursal de origen o en la de destino
    return (
        ctx.is_super_admin
        or current_branch_id in ctx.branch_ids
        or target_branch_id in ctx.branch_ids
    )


def can_manage_users(ctx: AuthContext) -> bool:
    return ctx.is_super_admin


def can_manage_branches(ctx: AuthContext) -> bool:
    return ctx.is_super_admin


def can_delete_user(ctx: AuthContext, user_id: int) -> bool:
    """Nadie puede borrar su propia cuenta, ni siquiera un super admin."""
    return ctx.user_id != user_id
