"""Dependency injection container."""
from dependency_injector import containers, providers

from lms.repositories.user_repository import UserRepository
from lms.repositories.context_repository import ContextRepository
from lms.repositories.role_repository import RoleRepository
from lms.repositories.user_preference_repository import UserPreferenceRepository
from lms.repositories.ajax_preference_repository import AjaxPreferenceRepository
from lms.repositories.block_instance_repository import BlockInstanceRepository

from lms.services.capability_service import CapabilityService
from lms.services.preference_service import PreferenceService
from lms.services.string_service import StringService


class Container(containers.DeclarativeContainer):
    """
    Application dependency injection container.

    Usage:
        container = Container()
        container.db_session.override(db.session)

        capabilities = container.capability_service()
    """

    # Configuration
    config = providers.Configuration()

    # Database session - must be overridden with actual db.session
    db_session = providers.Dependency()

    # ==================
    # Repositories
    # ==================

    user_repository = providers.Factory(
        UserRepository,
        session=db_session
    )

    context_repository = providers.Factory(
        ContextRepository,
        session=db_session
    )

    role_repository = providers.Factory(
        RoleRepository,
        session=db_session
    )

    user_preference_repository = providers.Factory(
        UserPreferenceRepository,
        session=db_session
    )

    ajax_preference_repository = providers.Factory(
        AjaxPreferenceRepository,
        session=db_session
    )

    block_instance_repository = providers.Factory(
        BlockInstanceRepository,
        session=db_session
    )

    # ==================
    # Services
    # ==================

    capability_service = providers.Factory(
        CapabilityService,
        role_repository=role_repository
    )

    preference_service = providers.Factory(
        PreferenceService,
        preference_repository=user_preference_repository,
        ajax_preference_repository=ajax_preference_repository
    )

    string_service = providers.Singleton(
        StringService,
        search_dirs=config.plugin_search_dirs,
        language=config.default_language
    )
