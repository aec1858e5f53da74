"""
Known bindings: FFI entry points the safe wrapper already calls.

This is the compiled-in registry source.  It lists every native function
referenced from the fmod-oxide wrapper crate (``fmod-oxide/src``) and must
be updated together with the wrapper.  To regenerate it from a checkout of
the crate, run ``ffi-coverage coverage --bindings-dir fmod-oxide/src ...``
and compare, or use ``BindingRegistry.from_wrapper_sources``.
"""

from typing import Tuple

# fmod-oxide crate version this list was taken from.
BINDINGS_VERSION = "0.2.0"

KNOWN_BINDINGS: Tuple[str, ...] = (
    "FMOD_ChannelControl_AddDSP",
    "FMOD_ChannelControl_GetDSP",
    "FMOD_ChannelControl_GetDSPIndex",
    "FMOD_ChannelControl_GetMixMatrix",
    "FMOD_ChannelControl_GetNumDSPs",
    "FMOD_ChannelControl_GetSystemObject",
    "FMOD_ChannelControl_GetUserData",
    "FMOD_ChannelControl_RemoveDSP",
    "FMOD_ChannelControl_SetCallback",
    "FMOD_ChannelControl_SetDSPIndex",
    "FMOD_ChannelControl_SetMixLevelsInput",
    "FMOD_ChannelControl_SetMixLevelsOutput",
    "FMOD_ChannelControl_SetMixMatrix",
    "FMOD_ChannelControl_SetPan",
    "FMOD_ChannelControl_SetUserData",
    "FMOD_ChannelGroup_AddGroup",
    "FMOD_ChannelGroup_CastToControl",
    "FMOD_ChannelGroup_GetGroup",
    "FMOD_ChannelGroup_GetNumGroups",
    "FMOD_ChannelGroup_GetParentGroup",
    "FMOD_Channel_CastToControl",
    "FMOD_DSPConnection_GetMix",
    "FMOD_DSPConnection_GetMixMatrix",
    "FMOD_DSPConnection_SetMix",
    "FMOD_DSPConnection_SetMixMatrix",
    "FMOD_DSP_GetCPUUsage",
    "FMOD_DSP_GetDataParameterIndex",
    "FMOD_DSP_GetInfo",
    "FMOD_DSP_GetMeteringEnabled",
    "FMOD_DSP_GetMeteringInfo",
    "FMOD_DSP_GetNumParameters",
    "FMOD_DSP_GetParameterBool",
    "FMOD_DSP_GetParameterData",
    "FMOD_DSP_GetParameterFloat",
    "FMOD_DSP_GetParameterInfo",
    "FMOD_DSP_GetParameterInt",
    "FMOD_DSP_GetSystemObject",
    "FMOD_DSP_GetType",
    "FMOD_DSP_GetUserData",
    "FMOD_DSP_Release",
    "FMOD_DSP_Reset",
    "FMOD_DSP_SetCallback",
    "FMOD_DSP_SetMeteringEnabled",
    "FMOD_DSP_SetParameterBool",
    "FMOD_DSP_SetParameterData",
    "FMOD_DSP_SetParameterFloat",
    "FMOD_DSP_SetParameterInt",
    "FMOD_DSP_SetUserData",
    "FMOD_DSP_ShowConfigDialog",
    "FMOD_Debug_Initialize",
    "FMOD_Geometry_AddPolygon",
    "FMOD_Geometry_GetActive",
    "FMOD_Geometry_GetMaxPolygons",
    "FMOD_Geometry_GetNumPolygons",
    "FMOD_Geometry_GetUserData",
    "FMOD_Geometry_Release",
    "FMOD_Geometry_Save",
    "FMOD_Geometry_SetActive",
    "FMOD_Geometry_SetUserData",
    "FMOD_Memory_GetStats",
    "FMOD_Memory_Initialize",
    "FMOD_Reverb3D_Get3DAttributes",
    "FMOD_Reverb3D_GetActive",
    "FMOD_Reverb3D_GetProperties",
    "FMOD_Reverb3D_GetUserData",
    "FMOD_Reverb3D_Release",
    "FMOD_Reverb3D_Set3DAttributes",
    "FMOD_Reverb3D_SetActive",
    "FMOD_Reverb3D_SetProperties",
    "FMOD_Reverb3D_SetUserData",
    "FMOD_Sound_AddSyncPoint",
    "FMOD_Sound_DeleteSyncPoint",
    "FMOD_Sound_GetNumSubSounds",
    "FMOD_Sound_GetNumSyncPoints",
    "FMOD_Sound_GetOpenState",
    "FMOD_Sound_GetSoundGroup",
    "FMOD_Sound_GetSubSound",
    "FMOD_Sound_GetSubSoundParent",
    "FMOD_Sound_GetSyncPoint",
    "FMOD_Sound_GetSyncPointInfo",
    "FMOD_Sound_Lock",
    "FMOD_Sound_ReadData",
    "FMOD_Sound_SeekData",
    "FMOD_Sound_SetSoundGroup",
    "FMOD_Sound_Unlock",
    "FMOD_Studio_Bank_GetBusCount",
    "FMOD_Studio_Bank_GetBusList",
    "FMOD_Studio_Bank_GetEventCount",
    "FMOD_Studio_Bank_GetEventList",
    "FMOD_Studio_Bank_GetID",
    "FMOD_Studio_Bank_GetPath",
    "FMOD_Studio_Bank_GetStringCount",
    "FMOD_Studio_Bank_GetStringInfo",
    "FMOD_Studio_Bank_GetUserData",
    "FMOD_Studio_Bank_GetVCACount",
    "FMOD_Studio_Bank_GetVCAList",
    "FMOD_Studio_Bank_IsValid",
    "FMOD_Studio_Bank_SetUserData",
    "FMOD_Studio_Bus_GetCPUUsage",
    "FMOD_Studio_Bus_GetChannelGroup",
    "FMOD_Studio_Bus_GetID",
    "FMOD_Studio_Bus_GetMemoryUsage",
    "FMOD_Studio_Bus_GetMute",
    "FMOD_Studio_Bus_GetPath",
    "FMOD_Studio_Bus_GetPaused",
    "FMOD_Studio_Bus_GetPortIndex",
    "FMOD_Studio_Bus_GetVolume",
    "FMOD_Studio_Bus_IsValid",
    "FMOD_Studio_Bus_LockChannelGroup",
    "FMOD_Studio_Bus_SetMute",
    "FMOD_Studio_Bus_SetPaused",
    "FMOD_Studio_Bus_SetPortIndex",
    "FMOD_Studio_Bus_SetVolume",
    "FMOD_Studio_Bus_StopAllEvents",
    "FMOD_Studio_Bus_UnlockChannelGroup",
    "FMOD_Studio_CommandReplay_GetCommandAtTime",
    "FMOD_Studio_CommandReplay_GetCommandCount",
    "FMOD_Studio_CommandReplay_GetCommandInfo",
    "FMOD_Studio_CommandReplay_GetCommandString",
    "FMOD_Studio_CommandReplay_GetLength",
    "FMOD_Studio_CommandReplay_GetSystem",
    "FMOD_Studio_CommandReplay_IsValid",
    "FMOD_Studio_CommandReplay_Release",
    "FMOD_Studio_CommandReplay_SetBankPath",
    "FMOD_Studio_EventDescription_CreateInstance",
    "FMOD_Studio_EventDescription_GetID",
    "FMOD_Studio_EventDescription_GetInstanceCount",
    "FMOD_Studio_EventDescription_GetInstanceList",
    "FMOD_Studio_EventDescription_GetLength",
    "FMOD_Studio_EventDescription_GetParameterDescriptionByID",
    "FMOD_Studio_EventDescription_GetParameterDescriptionByIndex",
    "FMOD_Studio_EventDescription_GetParameterDescriptionByName",
    "FMOD_Studio_EventDescription_GetParameterDescriptionCount",
    "FMOD_Studio_EventDescription_GetParameterLabelByID",
    "FMOD_Studio_EventDescription_GetParameterLabelByIndex",
    "FMOD_Studio_EventDescription_GetParameterLabelByName",
    "FMOD_Studio_EventDescription_GetPath",
    "FMOD_Studio_EventDescription_IsValid",
    "FMOD_Studio_EventDescription_ReleaseAllInstances",
    "FMOD_Studio_EventInstance_GetChannelGroup",
    "FMOD_Studio_EventInstance_GetDescription",
    "FMOD_Studio_EventInstance_GetReverbLevel",
    "FMOD_Studio_EventInstance_GetSystem",
    "FMOD_Studio_EventInstance_IsValid",
    "FMOD_Studio_EventInstance_Release",
    "FMOD_Studio_EventInstance_SetReverbLevel",
    "FMOD_Studio_ParseID",
    "FMOD_Studio_System_Create",
    "FMOD_Studio_System_GetAdvancedSettings",
    "FMOD_Studio_System_GetBank",
    "FMOD_Studio_System_GetBankByID",
    "FMOD_Studio_System_GetBankCount",
    "FMOD_Studio_System_GetBankList",
    "FMOD_Studio_System_GetBus",
    "FMOD_Studio_System_GetBusByID",
    "FMOD_Studio_System_GetCoreSystem",
    "FMOD_Studio_System_GetEvent",
    "FMOD_Studio_System_GetEventByID",
    "FMOD_Studio_System_GetParameterByID",
    "FMOD_Studio_System_GetParameterByName",
    "FMOD_Studio_System_GetParameterDescriptionByID",
    "FMOD_Studio_System_GetParameterDescriptionByName",
    "FMOD_Studio_System_GetParameterDescriptionCount",
    "FMOD_Studio_System_GetParameterDescriptionList",
    "FMOD_Studio_System_GetParameterLabelByID",
    "FMOD_Studio_System_GetParameterLabelByName",
    "FMOD_Studio_System_GetSoundInfo",
    "FMOD_Studio_System_GetVCA",
    "FMOD_Studio_System_GetVCAByID",
    "FMOD_Studio_System_Initialize",
    "FMOD_Studio_System_IsValid",
    "FMOD_Studio_System_LoadBankCustom",
    "FMOD_Studio_System_LoadBankFile",
    "FMOD_Studio_System_LoadBankMemory",
    "FMOD_Studio_System_LookupID",
    "FMOD_Studio_System_LookupPath",
    "FMOD_Studio_System_Release",
    "FMOD_Studio_System_SetAdvancedSettings",
    "FMOD_Studio_System_SetParameterByID",
    "FMOD_Studio_System_SetParameterByIDWithLabel",
    "FMOD_Studio_System_SetParameterByName",
    "FMOD_Studio_System_SetParameterByNameWithLabel",
    "FMOD_Studio_System_SetParametersByIDs",
    "FMOD_Studio_System_UnloadAll",
    "FMOD_Studio_VCA_GetID",
    "FMOD_Studio_VCA_GetPath",
    "FMOD_Studio_VCA_GetVolume",
    "FMOD_Studio_VCA_IsValid",
    "FMOD_Studio_VCA_SetVolume",
    "FMOD_System_AttachFileSystem",
    "FMOD_System_Create",
    "FMOD_System_CreateChannelGroup",
    "FMOD_System_CreateDSP",
    "FMOD_System_CreateDSPByType",
    "FMOD_System_CreateGeometry",
    "FMOD_System_CreateReverb3D",
    "FMOD_System_CreateSound",
    "FMOD_System_CreateSoundGroup",
    "FMOD_System_CreateStream",
    "FMOD_System_GetAdvancedSettings",
    "FMOD_System_GetChannel",
    "FMOD_System_GetDSPInfoByType",
    "FMOD_System_GetGeometryOcclusion",
    "FMOD_System_GetGeometrySettings",
    "FMOD_System_GetMasterChannelGroup",
    "FMOD_System_GetMasterSoundGroup",
    "FMOD_System_GetUserData",
    "FMOD_System_Init",
    "FMOD_System_LoadGeometry",
    "FMOD_System_LockDSP",
    "FMOD_System_PlayDSP",
    "FMOD_System_PlaySound",
    "FMOD_System_SetCallback",
    "FMOD_System_SetDSPBufferSize",
    "FMOD_System_SetFileSystem",
    "FMOD_System_SetGeometrySettings",
    "FMOD_System_SetOutput",
    "FMOD_System_SetOutputByPlugin",
    "FMOD_System_SetSoftwareChannels",
    "FMOD_System_SetSoftwareFormat",
    "FMOD_System_SetUserData",
    "FMOD_System_UnlockDSP",
    "FMOD_Thread_SetAttributes",
)
