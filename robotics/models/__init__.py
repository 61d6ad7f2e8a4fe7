"""Case record and robotics dispatch data models."""

from .ccd import (
    Address,
    Appeal,
    Appellant,
    Appointee,
    BenefitType,
    Contact,
    DateRange,
    DocumentLink,
    ExcludeDate,
    HearingOptions,
    Identity,
    MrnDetails,
    Name,
    RegionalProcessingCenter,
    Representative,
    SscsCaseData,
    SscsCaseDetails,
)
from .robotics import (
    AirlookupBenefitToVenue,
    Email,
    EmailAttachment,
    IdamTokens,
    RoboticsWrapper,
    UploadedDocument,
)

__all__ = [
    'Address',
    'Appeal',
    'Appellant',
    'Appointee',
    'BenefitType',
    'Contact',
    'DateRange',
    'DocumentLink',
    'ExcludeDate',
    'HearingOptions',
    'Identity',
    'MrnDetails',
    'Name',
    'RegionalProcessingCenter',
    'Representative',
    'SscsCaseData',
    'SscsCaseDetails',
    'AirlookupBenefitToVenue',
    'Email',
    'EmailAttachment',
    'IdamTokens',
    'RoboticsWrapper',
    'UploadedDocument',
]
