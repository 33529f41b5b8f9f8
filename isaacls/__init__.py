"""isaacls - Isaac Repentance API enum completion for Lua mods."""
