"""colgridcli - preview nested header layouts and render <thead> markup."""
