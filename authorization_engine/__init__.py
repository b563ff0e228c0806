from .builder import (
    SubroutineBuilder,
    build_deploy_subroutine,
    build_program_authorizations,
    build_withdraw_subroutine,
    create_authorizations_message,
    program_label,
)
from .filter import filter_authorizations
from .models import (
    PROCESS_FUNCTION,
    AtomicFunction,
    AuthorizationInfo,
    LibraryFunction,
    MessageDetails,
    MustBeIncluded,
    ProcessorMessage,
    ProgramAction,
    Subroutine,
)
from .reconstructor import (
    build_execute_messages,
    extract_function_identifiers,
    function_message,
    plan_send_msgs,
    send_msgs_message,
)
from .wire import (
    AuthorizationRecord,
    MalformedAuthorizationDataError,
    parse_authorization,
    parse_authorizations,
)

__all__ = [
    "AtomicFunction",
    "AuthorizationInfo",
    "AuthorizationRecord",
    "LibraryFunction",
    "MalformedAuthorizationDataError",
    "MessageDetails",
    "MustBeIncluded",
    "PROCESS_FUNCTION",
    "ProcessorMessage",
    "ProgramAction",
    "Subroutine",
    "SubroutineBuilder",
    "build_deploy_subroutine",
    "build_execute_messages",
    "build_program_authorizations",
    "build_withdraw_subroutine",
    "create_authorizations_message",
    "extract_function_identifiers",
    "filter_authorizations",
    "function_message",
    "parse_authorization",
    "parse_authorizations",
    "plan_send_msgs",
    "program_label",
    "send_msgs_message",
]
